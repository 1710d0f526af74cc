"""Delivery outcomes for a single endpoint and for a whole fan-out."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DeliveryOutcome(str, Enum):
    """Result of one transport call to one endpoint."""

    DELIVERED = "delivered"
    GONE = "gone"  # endpoint permanently invalid (404 / 410)
    TRANSIENT_ERROR = "transient_error"


class DispatchStatus(str, Enum):
    DELIVERED = "delivered"
    SKIPPED = "skipped"
    PARTIAL_FAILURE = "partial_failure"


@dataclass
class DispatchResult:
    """Aggregate of one notify call across all of a user's subscriptions."""

    user_id: str
    kind: str
    attempted: int = 0
    delivered: int = 0
    pruned_endpoints: list[str] = field(default_factory=list)
    transient_failures: int = 0

    def record(self, endpoint: str, outcome: DeliveryOutcome) -> None:
        self.attempted += 1
        if outcome == DeliveryOutcome.DELIVERED:
            self.delivered += 1
        elif outcome == DeliveryOutcome.GONE:
            self.pruned_endpoints.append(endpoint)
        else:
            self.transient_failures += 1

    @property
    def status(self) -> DispatchStatus:
        if self.attempted == 0:
            return DispatchStatus.SKIPPED
        if self.delivered == self.attempted:
            return DispatchStatus.DELIVERED
        return DispatchStatus.PARTIAL_FAILURE
