"""Inbound port for device registration and diagnostic pushes."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.subscription import Subscription
    from backend.src.core.value_objects.delivery import DispatchResult


@runtime_checkable
class ManageSubscriptionUseCase(Protocol):
    async def subscribe(self, user_id: str, endpoint: str, p256dh_key: str, auth_key: str) -> Subscription: ...
    async def send_test_notification(self, user_id: str, title: str, body: str) -> DispatchResult: ...
