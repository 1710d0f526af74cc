"""Port for task progress persistence."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.core.entities.task import Task
    from backend.src.core.value_objects.progress import AppliedLog


@runtime_checkable
class TaskRepositoryPort(Protocol):
    async def ensure(self, seed: Task) -> bool: ...
    async def add_logged_minutes(self, task_id: str, delta_minutes: int) -> Optional[AppliedLog]: ...
    async def get_by_id(self, task_id: str) -> Optional[Task]: ...
    async def count_incomplete_in_milestone(self, milestone_id: str) -> int: ...
    async def list_by_milestone(self, milestone_id: str) -> list[Task]: ...
