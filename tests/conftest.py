"""Shared test fixtures for all tests."""
from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from backend.src.core.entities.subscription import Subscription
from backend.src.core.entities.task import Task
from backend.src.core.value_objects.delivery import DeliveryOutcome


class RecordingPushDelivery:
    """Fake PushDeliveryPort that records payloads and replays scripted outcomes."""

    def __init__(self, outcomes: dict[str, DeliveryOutcome] | None = None):
        self.outcomes = outcomes or {}
        self.sent: list[tuple[str, dict]] = []

    async def send(self, payload: bytes, subscription: Subscription) -> DeliveryOutcome:
        self.sent.append((subscription.endpoint, json.loads(payload)))
        return self.outcomes.get(subscription.endpoint, DeliveryOutcome.DELIVERED)

    def payloads(self, kind: str | None = None) -> list[dict]:
        return [p for _, p in self.sent if kind is None or p["kind"] == kind]


# ── Entity Fixtures ────────────────────────────────────────────────────────

@pytest.fixture
def sample_task() -> Task:
    return Task(
        task_id="t1",
        title="Write report",
        color="#ff8800",
        milestone_id="m1",
        goal_id="g1",
        estimate_minutes=30,
        logged_minutes=10,
    )


@pytest.fixture
def sample_subscription() -> Subscription:
    return Subscription(
        endpoint="https://push.example.com/send/abc123",
        user_id="u1",
        p256dh_key="BPubKey",
        auth_key="authSecret",
    )


@pytest.fixture
def recording_delivery() -> RecordingPushDelivery:
    return RecordingPushDelivery()


# ── Mock Port Fixtures ─────────────────────────────────────────────────────

@pytest.fixture
def mock_task_repository():
    mock = AsyncMock()
    mock.ensure.return_value = True
    mock.add_logged_minutes.return_value = None
    mock.get_by_id.return_value = None
    mock.count_incomplete_in_milestone.return_value = 1
    mock.list_by_milestone.return_value = []
    return mock


@pytest.fixture
def mock_subscription_repository():
    mock = AsyncMock()
    mock.list_by_user.return_value = []
    mock.delete.return_value = True
    mock.upsert.side_effect = lambda sub: sub
    return mock


@pytest.fixture
def mock_notifier():
    return AsyncMock()


@pytest.fixture
def mock_aggregator():
    return AsyncMock()
