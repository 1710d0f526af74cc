"""Web Push adapter implementing PushDeliveryPort via pywebpush.

pywebpush handles VAPID signing and aes128gcm payload encryption; this
adapter only maps its HTTP outcome onto :class:`DeliveryOutcome`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import requests
from pywebpush import WebPushException, webpush

from backend.src.core.entities.subscription import Subscription
from backend.src.core.value_objects.delivery import DeliveryOutcome

logger = logging.getLogger(__name__)

# Push services answer 404/410 for subscriptions that will never work again.
GONE_STATUS_CODES = frozenset({404, 410})


class WebPushDelivery:
    """Sends encrypted payloads to browser push services."""

    def __init__(
        self,
        vapid_private_key: str,
        vapid_subject: str,
        ttl: int = 30,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._private_key = vapid_private_key
        self._subject = vapid_subject
        self._ttl = ttl
        self._timeout = timeout_seconds
        self._session = session or requests.Session()
        logger.info("WebPushDelivery initialised (subject=%s, ttl=%ds)", vapid_subject, ttl)

    async def send(self, payload: bytes, subscription: Subscription) -> DeliveryOutcome:
        """Deliver *payload*; the blocking HTTP call runs in a worker thread."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._send_sync, payload, subscription)

    def _send_sync(self, payload: bytes, subscription: Subscription) -> DeliveryOutcome:
        try:
            webpush(
                subscription_info=subscription.to_webpush_info(),
                data=payload,
                vapid_private_key=self._private_key,
                # pywebpush adds "aud"/"exp" to the claims dict, so pass a fresh one.
                vapid_claims={"sub": self._subject},
                ttl=self._ttl,
                timeout=self._timeout,
                requests_session=self._session,
            )
        except WebPushException as exc:
            status = getattr(exc.response, "status_code", None)
            if status in GONE_STATUS_CODES:
                logger.info("Push service reports subscription gone (HTTP %s)", status)
                return DeliveryOutcome.GONE
            logger.warning("Push rejected (HTTP %s): %s", status, exc)
            return DeliveryOutcome.TRANSIENT_ERROR
        except requests.RequestException as exc:
            logger.warning("Push transport error: %s", exc)
            return DeliveryOutcome.TRANSIENT_ERROR
        return DeliveryOutcome.DELIVERED
