"""Inbound port for logging time against a task."""
from __future__ import annotations
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable
if TYPE_CHECKING:
    from backend.src.application.dto.log_time_request import LogTimeRequest
    from backend.src.core.entities.task import Task
    from backend.src.core.value_objects.progress import MilestoneProgress, ProgressUpdate


@runtime_checkable
class LogTimeUseCase(Protocol):
    async def log_time(self, request: LogTimeRequest) -> ProgressUpdate: ...
    async def get_task(self, task_id: str) -> Optional[Task]: ...
    async def get_milestone(self, milestone_id: str) -> MilestoneProgress: ...
