"""Custom exception hierarchy for TempoPush."""
from __future__ import annotations


class TempoPushError(Exception):
    """Base exception for all TempoPush errors."""


class InvalidInputError(TempoPushError):
    """Raised when a request is missing required fields or carries bad values."""


class TaskNotFoundError(TempoPushError):
    """Raised when a task can be neither created nor updated."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class StoreError(TempoPushError):
    """Raised when the underlying persistence layer is unavailable."""
