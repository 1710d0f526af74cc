"""
Progress aggregation: apply a logged-time delta to a task and decide whether
its milestone has just been completed.
"""
from __future__ import annotations

import logging
from typing import Optional

from backend.src.core.entities.task import Task
from backend.src.core.exceptions import StoreError, TaskNotFoundError
from backend.src.core.value_objects.progress import ProgressUpdate

logger = logging.getLogger(__name__)


class ProgressAggregator:
    """Applies time logs through the task repository's atomic operations."""

    def __init__(self, task_repository):
        self._tasks = task_repository

    async def log_time(
        self,
        task_id: str,
        delta_minutes: int,
        milestone_id: Optional[str] = None,
        goal_id: Optional[str] = None,
        title: Optional[str] = None,
        estimate_minutes: Optional[int] = None,
        color: Optional[str] = None,
    ) -> ProgressUpdate:
        seed = Task.seed(
            task_id=task_id,
            title=title,
            color=color,
            milestone_id=milestone_id,
            goal_id=goal_id,
            estimate_minutes=estimate_minutes,
        )
        try:
            created = await self._tasks.ensure(seed)
            applied = await self._tasks.add_logged_minutes(task_id, delta_minutes)
        except StoreError:
            raise
        except Exception as exc:
            logger.error("Task store failure while logging %s: %s", task_id, exc)
            raise StoreError(f"Task store unavailable: {exc}") from exc

        if applied is None:
            raise TaskNotFoundError(task_id)
        if created:
            logger.info("Task seeded: %s (estimate=%dm)", task_id, seed.estimate_minutes)

        task = applied.task
        just_completed = False
        # The milestone named by the log event is the one checked. The rescan runs
        # after the update commits, so logs finishing the last two open tasks at
        # the same moment can both count zero and both report completion. It is
        # at least once: a completion is never missed.
        if applied.completed_now and milestone_id:
            just_completed = await self._milestone_complete(milestone_id)
            if just_completed:
                logger.info("Milestone %s completed by task %s", milestone_id, task_id)

        logger.debug(
            "Logged %dm on %s (changed=%s, %d/%dm)",
            delta_minutes,
            task_id,
            applied.changed,
            task.logged_minutes,
            task.estimate_minutes,
        )
        return ProgressUpdate(
            task_id=task.task_id,
            title=task.title,
            estimate_minutes=task.estimate_minutes,
            logged_minutes=task.logged_minutes,
            milestone_just_completed=just_completed,
            milestone_id=milestone_id or None,
            goal_id=goal_id or None,
        )

    async def _milestone_complete(self, milestone_id: str) -> bool:
        """Rescan the milestone's tasks; never cached so concurrent logs are seen."""
        try:
            remaining = await self._tasks.count_incomplete_in_milestone(milestone_id)
        except Exception as exc:
            logger.error("Milestone check failed for %s: %s", milestone_id, exc)
            raise StoreError(f"Task store unavailable: {exc}") from exc
        return remaining == 0
