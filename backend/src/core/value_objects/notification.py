"""Notification variants pushed to a user's devices.

Each variant carries only the fields its kind needs; the JSON wire payload is
produced by :func:`encode_notification` at the dispatch boundary.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class NotificationKind(str, Enum):
    LOG = "log"
    MILESTONE = "milestone"
    TEST = "test"


@dataclass(frozen=True)
class LogNotification:
    """Sent after every successful time log."""

    task_id: str
    task_title: str
    delta_minutes: int
    logged_minutes: int
    estimate_minutes: int

    kind = NotificationKind.LOG

    @property
    def title(self) -> str:
        return "Time logged"

    @property
    def body(self) -> str:
        return (
            f"{self.task_title} +{self.delta_minutes}m "
            f"({self.logged_minutes} / {self.estimate_minutes}m)"
        )

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "body": self.body,
            "kind": self.kind.value,
            "taskId": self.task_id,
            "deltaMins": self.delta_minutes,
            "loggedMins": self.logged_minutes,
            "estimateMins": self.estimate_minutes,
        }


@dataclass(frozen=True)
class MilestoneNotification:
    """Sent once, when the last open task of a milestone is completed."""

    milestone_id: str
    goal_id: Optional[str] = None

    kind = NotificationKind.MILESTONE

    @property
    def title(self) -> str:
        return "Milestone complete"

    @property
    def body(self) -> str:
        return "You've completed all tasks for a milestone."

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "body": self.body,
            "kind": self.kind.value,
            "milestoneId": self.milestone_id,
            "goalId": self.goal_id or "",
        }


@dataclass(frozen=True)
class TestNotification:
    """Operator-triggered diagnostic push."""

    # Not a pytest test class despite the name.
    __test__ = False

    title: str = ""
    body: str = ""

    kind = NotificationKind.TEST

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "body": self.body,
            "kind": self.kind.value,
        }


Notification = Union[LogNotification, MilestoneNotification, TestNotification]


def encode_notification(notification: Notification) -> bytes:
    """Serialize a notification into the JSON bytes handed to the transport."""
    return json.dumps(notification.to_payload(), ensure_ascii=False).encode("utf-8")
