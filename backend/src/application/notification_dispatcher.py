"""
Notification fan-out: deliver one notification to every registered device of a
user and prune endpoints the transport reports as gone.
"""
from __future__ import annotations

import asyncio
import logging

from backend.src.core.entities.subscription import Subscription
from backend.src.core.exceptions import StoreError
from backend.src.core.value_objects.delivery import DeliveryOutcome, DispatchResult
from backend.src.core.value_objects.notification import Notification, encode_notification

logger = logging.getLogger(__name__)

DEFAULT_DELIVERY_TIMEOUT = 10.0
DEFAULT_CONCURRENCY = 4


class NotificationDispatcher:
    """Implements :class:`NotificationPort` on top of a subscription registry
    and a push delivery transport.

    Every subscription of the user is attempted on every call; one endpoint
    failing never stops the others. Transient failures are logged and left
    alone (no retry), permanent ones delete the subscription.
    """

    def __init__(
        self,
        subscriptions,
        delivery,
        timeout_seconds: float = DEFAULT_DELIVERY_TIMEOUT,
        concurrency: int = DEFAULT_CONCURRENCY,
    ):
        self._subscriptions = subscriptions
        self._delivery = delivery
        self._timeout = timeout_seconds
        self._concurrency = max(1, concurrency)

    async def notify(self, user_id: str, notification: Notification) -> DispatchResult:
        result = DispatchResult(user_id=user_id, kind=notification.kind.value)
        try:
            subscriptions = await self._subscriptions.list_by_user(user_id)
        except Exception as exc:
            logger.error("Could not load subscriptions for user %s: %s", user_id, exc)
            raise StoreError(f"Subscription store unavailable: {exc}") from exc

        if not subscriptions:
            logger.debug("No subscriptions for user %s; skipping %s push", user_id, result.kind)
            return result

        payload = encode_notification(notification)
        semaphore = asyncio.Semaphore(self._concurrency)

        async def _limited(sub: Subscription) -> DeliveryOutcome:
            async with semaphore:
                return await self._deliver(payload, sub)

        outcomes = await asyncio.gather(*[_limited(s) for s in subscriptions])

        for sub, outcome in zip(subscriptions, outcomes):
            result.record(sub.endpoint, outcome)
            if outcome == DeliveryOutcome.GONE:
                await self._prune(sub)

        logger.info(
            "Push %s to user %s: %d/%d delivered, %d pruned, %d transient",
            result.kind,
            user_id,
            result.delivered,
            result.attempted,
            len(result.pruned_endpoints),
            result.transient_failures,
        )
        return result

    async def _deliver(self, payload: bytes, subscription: Subscription) -> DeliveryOutcome:
        try:
            return await asyncio.wait_for(
                self._delivery.send(payload, subscription), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Push to %s timed out after %.1fs", _short(subscription.endpoint), self._timeout
            )
        except Exception as exc:
            logger.warning("Push to %s failed: %s", _short(subscription.endpoint), exc)
        return DeliveryOutcome.TRANSIENT_ERROR

    async def _prune(self, subscription: Subscription) -> None:
        try:
            await self._subscriptions.delete(subscription.endpoint)
            logger.info(
                "Removed dead subscription %s (user %s)",
                _short(subscription.endpoint),
                subscription.user_id,
            )
        except Exception as exc:
            logger.error("Failed to remove dead subscription %s: %s", _short(subscription.endpoint), exc)


def _short(endpoint: str, keep: int = 48) -> str:
    """Endpoints are long capability URLs; log only their head."""
    return endpoint if len(endpoint) <= keep else endpoint[:keep] + "..."
