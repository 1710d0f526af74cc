"""
Dependency injection container.
Wires together ports and adapters based on configuration.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class ApplicationContainer:
    """Simplified container that builds concrete instances from settings.

    Usage::

        container = ApplicationContainer(settings)
        await container.init_storage()
        service = container.progress_service()
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self._cache: dict[str, object] = {}

    def _get_or_create(self, key: str, factory):
        if key not in self._cache:
            self._cache[key] = factory(self.settings)
        return self._cache[key]

    # ── Lazy factory helpers ──────────────────────────────────────

    @staticmethod
    def _build_engine(settings: Settings):
        from backend.src.infrastructure.database import get_async_engine
        return get_async_engine(settings.database.url, echo=settings.database.echo)

    def _build_session_factory(self, settings: Settings):
        from backend.src.infrastructure.database import get_async_session_factory
        return get_async_session_factory(self.engine())

    def _build_task_repository(self, settings: Settings):
        if settings.persistence_backend == "sql":
            from backend.src.adapters.outbound.persistence.sql_task_repo import SqlTaskRepository
            return SqlTaskRepository(self.session_factory())
        from backend.src.adapters.outbound.persistence.in_memory_task_repo import InMemoryTaskRepository
        return InMemoryTaskRepository()

    def _build_subscription_repository(self, settings: Settings):
        if settings.persistence_backend == "sql":
            from backend.src.adapters.outbound.persistence.sql_subscription_repo import (
                SqlSubscriptionRepository,
            )
            return SqlSubscriptionRepository(self.session_factory())
        from backend.src.adapters.outbound.persistence.in_memory_subscription_repo import (
            InMemorySubscriptionRepository,
        )
        return InMemorySubscriptionRepository()

    @staticmethod
    def _build_push_delivery(settings: Settings):
        if settings.push.configured:
            from backend.src.adapters.outbound.push.webpush_delivery import WebPushDelivery
            return WebPushDelivery(
                vapid_private_key=settings.push.private_key,
                vapid_subject=settings.push.subject,
                ttl=settings.push.ttl,
                timeout_seconds=settings.push.timeout_seconds,
            )
        logger.warning("VAPID keys not configured; pushes will only be logged")
        from backend.src.adapters.outbound.push.logging_delivery import LoggingPushDelivery
        return LoggingPushDelivery()

    def _build_notifier(self, settings: Settings):
        from backend.src.application.notification_dispatcher import NotificationDispatcher
        return NotificationDispatcher(
            subscriptions=self.subscription_repository(),
            delivery=self.push_delivery(),
            timeout_seconds=settings.push.timeout_seconds,
            concurrency=settings.push.concurrency,
        )

    def _build_aggregator(self, settings: Settings):
        from backend.src.application.progress_aggregator import ProgressAggregator
        return ProgressAggregator(task_repository=self.task_repository())

    # ── Port accessors ─────────────────────────────────────────────

    def engine(self):
        return self._get_or_create("engine", self._build_engine)

    def session_factory(self):
        return self._get_or_create("session_factory", self._build_session_factory)

    def task_repository(self):
        return self._get_or_create("task_repository", self._build_task_repository)

    def subscription_repository(self):
        return self._get_or_create("subscription_repository", self._build_subscription_repository)

    def push_delivery(self):
        return self._get_or_create("push_delivery", self._build_push_delivery)

    def notifier(self):
        return self._get_or_create("notifier", self._build_notifier)

    def aggregator(self):
        return self._get_or_create("aggregator", self._build_aggregator)

    # ── Application services ───────────────────────────────────────

    def progress_service(self):
        from backend.src.application.progress_service import ProgressService
        return ProgressService(
            aggregator=self.aggregator(),
            notifier=self.notifier(),
            subscription_repository=self.subscription_repository(),
            task_repository=self.task_repository(),
        )

    # ── Lifecycle ──────────────────────────────────────────────────

    async def init_storage(self) -> None:
        """Create tables on first run when the SQL backend is selected."""
        if self.settings.persistence_backend != "sql" or not self.settings.database.create_schema:
            return
        from backend.src.infrastructure.database import create_schema
        await create_schema(self.engine())

    async def aclose(self) -> None:
        engine = self._cache.pop("engine", None)
        if engine is not None:
            await engine.dispose()
            logger.info("Database engine disposed")
