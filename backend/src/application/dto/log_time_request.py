"""DTO for a log-time event."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from backend.src.core.entities.task import MAX_MINUTES
from backend.src.core.exceptions import InvalidInputError


@dataclass
class LogTimeRequest:
    user_id: str
    task_id: str
    delta_minutes: int
    milestone_id: Optional[str] = None
    goal_id: Optional[str] = None
    # Seeds, honoured only the first time a task id is seen.
    task_title: Optional[str] = None
    estimate_minutes: Optional[int] = None
    color: Optional[str] = None

    def validate(self) -> None:
        if not self.user_id or not self.user_id.strip():
            raise InvalidInputError("userId required")
        if not self.task_id or not self.task_id.strip():
            raise InvalidInputError("taskId required")
        if isinstance(self.delta_minutes, bool) or not isinstance(self.delta_minutes, int):
            raise InvalidInputError("deltaMins must be an integer")
        if self.delta_minutes <= 0:
            raise InvalidInputError("deltaMins must be positive")
        if self.delta_minutes > MAX_MINUTES:
            raise InvalidInputError(f"deltaMins must not exceed {MAX_MINUTES}")
        if self.estimate_minutes is not None and self.estimate_minutes > MAX_MINUTES:
            raise InvalidInputError(f"estimateMins must not exceed {MAX_MINUTES}")
