"""Integration tests for push subscription endpoints."""
from __future__ import annotations

import pytest

SUBSCRIBE_BODY = {
    "userId": "u1",
    "subscription": {
        "endpoint": "https://push.example.com/send/abc",
        "keys": {"p256dh": "BPubKey", "auth": "authSecret"},
    },
}


class TestSubscribe:
    """Tests for POST /api/push/subscribe."""

    @pytest.mark.asyncio
    async def test_subscribe_returns_no_content(self, async_client, test_container):
        response = await async_client.post("/api/push/subscribe", json=SUBSCRIBE_BODY)

        assert response.status_code == 204
        assert response.content == b""
        stored = await test_container.subscription_repository().list_by_user("u1")
        assert [s.endpoint for s in stored] == ["https://push.example.com/send/abc"]
        assert stored[0].p256dh_key == "BPubKey"

    @pytest.mark.asyncio
    async def test_subscribe_twice_keeps_one_record(self, async_client, test_container):
        await async_client.post("/api/push/subscribe", json=SUBSCRIBE_BODY)
        await async_client.post("/api/push/subscribe", json=SUBSCRIBE_BODY)

        stored = await test_container.subscription_repository().list_by_user("u1")
        assert len(stored) == 1

    @pytest.mark.asyncio
    async def test_missing_user_id(self, async_client):
        body = {"subscription": SUBSCRIBE_BODY["subscription"]}
        response = await async_client.post("/api/push/subscribe", json=body)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_endpoint(self, async_client):
        body = {"userId": "u1", "subscription": {"keys": {"p256dh": "k", "auth": "a"}}}
        response = await async_client.post("/api/push/subscribe", json=body)

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_json(self, async_client):
        response = await async_client.post(
            "/api/push/subscribe",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400


class TestSendTestPush:
    """Tests for POST /api/push/test."""

    @pytest.mark.asyncio
    async def test_push_reaches_subscribed_device(self, async_client, recording_delivery):
        await async_client.post("/api/push/subscribe", json=SUBSCRIBE_BODY)

        response = await async_client.post(
            "/api/push/test", json={"userId": "u1", "title": "Hello", "body": "From the API"}
        )

        assert response.status_code == 204
        assert recording_delivery.payloads("test") == [
            {"title": "Hello", "body": "From the API", "kind": "test"}
        ]

    @pytest.mark.asyncio
    async def test_push_without_subscriptions_succeeds(self, async_client, recording_delivery):
        response = await async_client.post("/api/push/test", json={"userId": "nobody"})

        assert response.status_code == 204
        assert recording_delivery.sent == []

    @pytest.mark.asyncio
    async def test_missing_user_id(self, async_client):
        response = await async_client.post("/api/push/test", json={"title": "x"})

        assert response.status_code == 400
