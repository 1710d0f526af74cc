"""Port for push subscription persistence."""
from __future__ import annotations
from typing import TYPE_CHECKING, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.subscription import Subscription


@runtime_checkable
class SubscriptionRepositoryPort(Protocol):
    async def upsert(self, subscription: Subscription) -> Subscription: ...
    async def list_by_user(self, user_id: str) -> list[Subscription]: ...
    async def delete(self, endpoint: str) -> bool: ...
