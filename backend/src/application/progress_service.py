"""
Progress tracking use cases: device registration, time logging with
notifications, and diagnostic pushes.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.application.dto.log_time_request import LogTimeRequest
from backend.src.core.entities.subscription import Subscription
from backend.src.core.entities.task import Task
from backend.src.core.exceptions import InvalidInputError
from backend.src.core.value_objects.delivery import DispatchResult, DispatchStatus
from backend.src.core.value_objects.notification import (
    LogNotification,
    MilestoneNotification,
    Notification,
    TestNotification,
)
from backend.src.core.value_objects.progress import MilestoneProgress, ProgressUpdate

logger = logging.getLogger(__name__)


class ProgressService:
    """Orchestrates the aggregator and the notifier for each inbound event."""

    def __init__(self, aggregator, notifier, subscription_repository, task_repository):
        self._aggregator = aggregator
        self._notifier = notifier
        self._subscriptions = subscription_repository
        self._tasks = task_repository

    async def subscribe(
        self, user_id: str, endpoint: str, p256dh_key: str, auth_key: str
    ) -> Subscription:
        if not user_id or not endpoint:
            raise InvalidInputError("missing fields")
        subscription = Subscription(
            endpoint=endpoint,
            user_id=user_id,
            p256dh_key=p256dh_key or "",
            auth_key=auth_key or "",
        )
        saved = await self._subscriptions.upsert(subscription)
        logger.info("Subscription registered for user %s", user_id)
        return saved

    async def log_time(self, request: LogTimeRequest) -> ProgressUpdate:
        """Persist the log, then push a ``log`` and possibly a ``milestone`` notification.

        The state mutation is authoritative: if it fails nothing is sent, and
        no notification outcome can undo it.
        """
        request.validate()
        update = await self._aggregator.log_time(
            task_id=request.task_id,
            delta_minutes=request.delta_minutes,
            milestone_id=request.milestone_id,
            goal_id=request.goal_id,
            title=request.task_title,
            estimate_minutes=request.estimate_minutes,
            color=request.color,
        )

        await self._notify_quietly(
            request.user_id,
            LogNotification(
                task_id=update.task_id,
                task_title=update.title,
                delta_minutes=request.delta_minutes,
                logged_minutes=update.logged_minutes,
                estimate_minutes=update.estimate_minutes,
            ),
        )

        if update.milestone_just_completed and update.milestone_id:
            await self._notify_quietly(
                request.user_id,
                MilestoneNotification(milestone_id=update.milestone_id, goal_id=update.goal_id),
            )
        return update

    async def send_test_notification(self, user_id: str, title: str, body: str) -> DispatchResult:
        if not user_id:
            raise InvalidInputError("userId required")
        return await self._notifier.notify(user_id, TestNotification(title=title or "", body=body or ""))

    async def get_task(self, task_id: str) -> Optional[Task]:
        return await self._tasks.get_by_id(task_id)

    async def get_milestone(self, milestone_id: str) -> MilestoneProgress:
        tasks = await self._tasks.list_by_milestone(milestone_id)
        return MilestoneProgress(milestone_id=milestone_id, tasks=tuple(tasks))

    async def _notify_quietly(self, user_id: str, notification: Notification) -> Optional[DispatchResult]:
        # The log is already persisted; delivery failures never reach the caller.
        try:
            result = await self._notifier.notify(user_id, notification)
        except Exception as exc:
            logger.warning("Notification %s for user %s dropped: %s", notification.kind.value, user_id, exc)
            return None
        if result.status == DispatchStatus.PARTIAL_FAILURE:
            logger.debug("Notification %s for user %s partially failed", notification.kind.value, user_id)
        return result
