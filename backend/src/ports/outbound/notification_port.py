"""Port for fanning a notification out to every device of a user."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.value_objects.delivery import DispatchResult
    from backend.src.core.value_objects.notification import Notification


@runtime_checkable
class NotificationPort(Protocol):
    async def notify(self, user_id: str, notification: Notification) -> DispatchResult: ...
