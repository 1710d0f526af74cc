"""Value objects describing task and milestone progress."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from backend.src.core.entities.task import Task, milestone_complete


@dataclass(frozen=True)
class AppliedLog:
    """What the store reports back after an atomic increment-and-clamp.

    ``changed`` is False when the task was already saturated; the store then
    leaves the row untouched.
    """

    task: Task
    changed: bool

    @property
    def completed_now(self) -> bool:
        """True only for the log that moved the task onto its estimate."""
        return self.changed and self.task.is_complete


@dataclass(frozen=True)
class ProgressUpdate:
    """Totals returned by the progress aggregator for one log event."""

    task_id: str
    title: str
    estimate_minutes: int
    logged_minutes: int
    milestone_just_completed: bool
    milestone_id: Optional[str] = None
    goal_id: Optional[str] = None


@dataclass(frozen=True)
class MilestoneProgress:
    """Snapshot of every task grouped under one milestone."""

    milestone_id: str
    tasks: tuple[Task, ...] = ()

    @property
    def complete(self) -> bool:
        return bool(self.tasks) and milestone_complete(list(self.tasks))

    @property
    def logged_minutes(self) -> int:
        return sum(t.logged_minutes for t in self.tasks)

    @property
    def estimate_minutes(self) -> int:
        return sum(t.estimate_minutes for t in self.tasks)
