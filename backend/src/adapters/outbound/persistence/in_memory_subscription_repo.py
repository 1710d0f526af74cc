"""In-memory implementation of SubscriptionRepositoryPort."""

from __future__ import annotations

import asyncio
import dataclasses
import logging

from backend.src.core.entities.subscription import Subscription

logger = logging.getLogger(__name__)


class InMemorySubscriptionRepository:
    """In-memory subscription registry keyed by endpoint."""

    def __init__(self) -> None:
        self._store: dict[str, Subscription] = {}
        self._lock = asyncio.Lock()

    async def upsert(self, subscription: Subscription) -> Subscription:
        async with self._lock:
            self._store[subscription.endpoint] = dataclasses.replace(subscription)
            logger.debug("Saved subscription for user %s in memory", subscription.user_id)
            return subscription

    async def list_by_user(self, user_id: str) -> list[Subscription]:
        async with self._lock:
            return [
                dataclasses.replace(s)
                for s in sorted(self._store.values(), key=lambda s: s.created_at)
                if s.user_id == user_id
            ]

    async def delete(self, endpoint: str) -> bool:
        async with self._lock:
            removed = self._store.pop(endpoint, None)
            if removed is None:
                logger.debug("No subscription stored for endpoint; nothing deleted")
                return False
            return True
