"""Subscription entity - one device's Web Push channel."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Subscription:
    """A push endpoint registered by a user.

    ``endpoint`` is the identity: a device that re-subscribes with the same
    endpoint replaces its previous record instead of adding a second one.
    """

    endpoint: str
    user_id: str
    p256dh_key: str = ""
    auth_key: str = ""
    created_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        if not self.endpoint or not self.endpoint.strip():
            raise ValueError("endpoint is required")
        if not self.user_id or not self.user_id.strip():
            raise ValueError("user_id is required")

    def to_webpush_info(self) -> dict:
        """Subscription info in the shape the browser PushManager reports it."""
        return {
            "endpoint": self.endpoint,
            "keys": {"p256dh": self.p256dh_key, "auth": self.auth_key},
        }
