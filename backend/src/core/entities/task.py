"""Task entity - cumulative logged time against an estimate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

MIN_ESTIMATE_MINUTES = 1
# Largest value a 32-bit INTEGER column holds.
MAX_MINUTES = 2**31 - 1


def normalize_estimate(estimate_minutes: Optional[int]) -> int:
    """Coerce a missing or non-positive estimate into 1..MAX_MINUTES."""
    if estimate_minutes is None or estimate_minutes < MIN_ESTIMATE_MINUTES:
        return MIN_ESTIMATE_MINUTES
    return min(int(estimate_minutes), MAX_MINUTES)


def clamp_logged(logged_minutes: int, delta_minutes: int, estimate_minutes: int) -> int:
    """Saturating accumulation: a task can never hold more than its estimate."""
    return max(0, min(estimate_minutes, logged_minutes + delta_minutes))


@dataclass
class Task:
    """A unit of work whose progress is tracked in minutes.

    Invariant: ``0 <= logged_minutes <= estimate_minutes``.
    """

    task_id: str
    title: str = ""
    color: str = ""
    milestone_id: Optional[str] = None
    goal_id: Optional[str] = None
    estimate_minutes: int = MIN_ESTIMATE_MINUTES
    logged_minutes: int = 0

    def __post_init__(self) -> None:
        if not self.task_id or not self.task_id.strip():
            raise ValueError("task_id is required")
        if not self.title or not self.title.strip():
            self.title = self.task_id
        self.milestone_id = self.milestone_id or None
        self.goal_id = self.goal_id or None
        self.estimate_minutes = normalize_estimate(self.estimate_minutes)
        self.logged_minutes = clamp_logged(0, self.logged_minutes, self.estimate_minutes)

    @classmethod
    def seed(
        cls,
        task_id: str,
        title: Optional[str] = None,
        color: Optional[str] = None,
        milestone_id: Optional[str] = None,
        goal_id: Optional[str] = None,
        estimate_minutes: Optional[int] = None,
    ) -> Task:
        """Build the initial record for a task seen for the first time."""
        return cls(
            task_id=task_id,
            title=title or "",
            color=color or "",
            milestone_id=milestone_id,
            goal_id=goal_id,
            estimate_minutes=normalize_estimate(estimate_minutes),
            logged_minutes=0,
        )

    @property
    def is_complete(self) -> bool:
        return self.logged_minutes == self.estimate_minutes

    @property
    def remaining_minutes(self) -> int:
        return self.estimate_minutes - self.logged_minutes

    def log(self, delta_minutes: int) -> int:
        """Apply *delta_minutes* in place and return the minutes actually applied."""
        before = self.logged_minutes
        self.logged_minutes = clamp_logged(before, delta_minutes, self.estimate_minutes)
        return self.logged_minutes - before


def milestone_complete(tasks: list[Task]) -> bool:
    """A milestone is complete when every member task has reached its estimate."""
    return all(t.is_complete for t in tasks)
