"""In-memory implementation of TaskRepositoryPort."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from typing import Optional

from backend.src.core.entities.task import Task
from backend.src.core.value_objects.progress import AppliedLog

logger = logging.getLogger(__name__)


class InMemoryTaskRepository:
    """In-memory task store; every mutation runs under one asyncio lock.

    Callers always receive copies, so no entity state leaks between requests.
    """

    def __init__(self) -> None:
        self._store: dict[str, Task] = {}
        self._lock = asyncio.Lock()

    async def ensure(self, seed: Task) -> bool:
        async with self._lock:
            if seed.task_id in self._store:
                return False
            self._store[seed.task_id] = dataclasses.replace(seed, logged_minutes=0)
            logger.debug("Seeded task %s in memory", seed.task_id)
            return True

    async def add_logged_minutes(self, task_id: str, delta_minutes: int) -> Optional[AppliedLog]:
        async with self._lock:
            task = self._store.get(task_id)
            if task is None:
                logger.warning("Cannot log time: task %s not found", task_id)
                return None
            if task.is_complete:
                return AppliedLog(task=dataclasses.replace(task), changed=False)
            task.log(delta_minutes)
            return AppliedLog(task=dataclasses.replace(task), changed=True)

    async def get_by_id(self, task_id: str) -> Optional[Task]:
        async with self._lock:
            task = self._store.get(task_id)
            return dataclasses.replace(task) if task is not None else None

    async def count_incomplete_in_milestone(self, milestone_id: str) -> int:
        async with self._lock:
            return sum(
                1
                for t in self._store.values()
                if t.milestone_id == milestone_id and not t.is_complete
            )

    async def list_by_milestone(self, milestone_id: str) -> list[Task]:
        async with self._lock:
            return [
                dataclasses.replace(t)
                for t in sorted(self._store.values(), key=lambda t: t.task_id)
                if t.milestone_id == milestone_id
            ]
