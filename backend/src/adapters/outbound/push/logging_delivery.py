"""Log-only delivery adapter for development without VAPID keys.

Records every payload instead of contacting a push service.
"""
from __future__ import annotations

import logging
from collections import deque

from backend.src.core.entities.subscription import Subscription
from backend.src.core.value_objects.delivery import DeliveryOutcome

logger = logging.getLogger(__name__)


class LoggingPushDelivery:
    """Development stand-in that accepts every push and reports it delivered."""

    def __init__(self) -> None:
        self.sent: deque[tuple[str, bytes]] = deque(maxlen=100)

    async def send(self, payload: bytes, subscription: Subscription) -> DeliveryOutcome:
        self.sent.append((subscription.endpoint, payload))
        logger.info(
            "LoggingPush: user=%s payload=%s",
            subscription.user_id,
            payload.decode("utf-8", errors="replace"),
        )
        return DeliveryOutcome.DELIVERED
