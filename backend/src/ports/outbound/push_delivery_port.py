"""Port for delivering an encoded payload to one push endpoint."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.subscription import Subscription
    from backend.src.core.value_objects.delivery import DeliveryOutcome


@runtime_checkable
class PushDeliveryPort(Protocol):
    async def send(self, payload: bytes, subscription: Subscription) -> DeliveryOutcome: ...
