"""Integration tests for task time-logging endpoints."""
from __future__ import annotations

import pytest

from backend.src.core.value_objects.delivery import DeliveryOutcome

ENDPOINT = "https://push.example.com/send/abc"


async def _subscribe(client, user_id: str = "u1", endpoint: str = ENDPOINT) -> None:
    response = await client.post(
        "/api/push/subscribe",
        json={
            "userId": user_id,
            "subscription": {"endpoint": endpoint, "keys": {"p256dh": "k", "auth": "a"}},
        },
    )
    assert response.status_code == 204


def _log_body(**overrides) -> dict:
    body = {
        "userId": "u1",
        "goalId": "g1",
        "milestoneId": "m1",
        "taskId": "t1",
        "deltaMins": 20,
        "taskTitle": "Write report",
        "estimateMins": 30,
        "color": "#ff8800",
    }
    body.update(overrides)
    return body


class TestLogTask:
    """Tests for POST /api/tasks/log."""

    @pytest.mark.asyncio
    async def test_log_returns_no_content(self, async_client):
        response = await async_client.post("/api/tasks/log", json=_log_body())

        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_log_then_complete_milestone(self, async_client, recording_delivery):
        await _subscribe(async_client)

        first = await async_client.post("/api/tasks/log", json=_log_body())
        second = await async_client.post("/api/tasks/log", json=_log_body(deltaMins=15))

        assert first.status_code == 204
        assert second.status_code == 204
        logs = recording_delivery.payloads("log")
        assert [p["loggedMins"] for p in logs] == [20, 30]
        assert logs[1]["body"] == "Write report +15m (30 / 30m)"
        milestones = recording_delivery.payloads("milestone")
        assert len(milestones) == 1
        assert milestones[0]["milestoneId"] == "m1"
        assert milestones[0]["goalId"] == "g1"

        task = await async_client.get("/api/tasks/t1")
        assert task.json()["loggedMins"] == 30

    @pytest.mark.asyncio
    async def test_milestone_pushed_once_across_tasks(self, async_client, recording_delivery):
        await _subscribe(async_client)

        await async_client.post("/api/tasks/log", json=_log_body(taskId="T1", deltaMins=4, estimateMins=10))
        await async_client.post("/api/tasks/log", json=_log_body(taskId="T2", deltaMins=5, estimateMins=5))
        assert recording_delivery.payloads("milestone") == []

        await async_client.post("/api/tasks/log", json=_log_body(taskId="T1", deltaMins=6))
        await async_client.post("/api/tasks/log", json=_log_body(taskId="T1", deltaMins=3))

        assert len(recording_delivery.payloads("milestone")) == 1

    @pytest.mark.asyncio
    async def test_gone_subscription_pruned(self, async_client, recording_delivery, test_container):
        await _subscribe(async_client)
        recording_delivery.outcomes[ENDPOINT] = DeliveryOutcome.GONE

        response = await async_client.post("/api/tasks/log", json=_log_body())

        assert response.status_code == 204
        assert await test_container.subscription_repository().list_by_user("u1") == []

    @pytest.mark.asyncio
    async def test_transient_failure_still_succeeds(self, async_client, recording_delivery, test_container):
        await _subscribe(async_client)
        recording_delivery.outcomes[ENDPOINT] = DeliveryOutcome.TRANSIENT_ERROR

        response = await async_client.post("/api/tasks/log", json=_log_body())

        assert response.status_code == 204
        assert len(await test_container.subscription_repository().list_by_user("u1")) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides",
        [
            {"userId": ""},
            {"taskId": ""},
            {"deltaMins": 0},
            {"deltaMins": -5},
            {"deltaMins": "lots"},
            {"deltaMins": 2**31},
            {"estimateMins": 2**31},
        ],
    )
    async def test_invalid_body_rejected(self, async_client, recording_delivery, overrides):
        response = await async_client.post("/api/tasks/log", json=_log_body(**overrides))

        assert response.status_code == 400
        assert recording_delivery.sent == []

    @pytest.mark.asyncio
    async def test_missing_delta_rejected(self, async_client):
        body = _log_body()
        del body["deltaMins"]
        response = await async_client.post("/api/tasks/log", json=body)

        assert response.status_code == 400


class TestGetTask:
    """Tests for GET /api/tasks/{task_id}."""

    @pytest.mark.asyncio
    async def test_get_task(self, async_client):
        await async_client.post("/api/tasks/log", json=_log_body(deltaMins=10))

        response = await async_client.get("/api/tasks/t1")

        assert response.status_code == 200
        assert response.json() == {
            "taskId": "t1",
            "title": "Write report",
            "color": "#ff8800",
            "milestoneId": "m1",
            "goalId": "g1",
            "estimateMins": 30,
            "loggedMins": 10,
        }

    @pytest.mark.asyncio
    async def test_get_task_not_found(self, async_client):
        response = await async_client.get("/api/tasks/nonexistent")

        assert response.status_code == 404


class TestGetMilestone:
    """Tests for GET /api/milestones/{milestone_id}."""

    @pytest.mark.asyncio
    async def test_milestone_progress(self, async_client):
        await async_client.post("/api/tasks/log", json=_log_body(taskId="T2", deltaMins=5, estimateMins=5))
        await async_client.post("/api/tasks/log", json=_log_body(taskId="T1", deltaMins=4, estimateMins=10))

        response = await async_client.get("/api/milestones/m1")

        assert response.status_code == 200
        data = response.json()
        assert data["milestoneId"] == "m1"
        assert data["complete"] is False
        assert data["estimateMins"] == 15
        assert data["loggedMins"] == 9
        assert [t["taskId"] for t in data["tasks"]] == ["T1", "T2"]
        assert data["tasks"][0]["remainingMins"] == 6
        assert data["tasks"][1]["complete"] is True

    @pytest.mark.asyncio
    async def test_unknown_milestone(self, async_client):
        response = await async_client.get("/api/milestones/none")

        assert response.status_code == 404
