"""Unit tests for NotificationDispatcher."""
from __future__ import annotations

import asyncio

import pytest

from backend.src.adapters.outbound.persistence.in_memory_subscription_repo import (
    InMemorySubscriptionRepository,
)
from backend.src.application.notification_dispatcher import NotificationDispatcher
from backend.src.core.entities.subscription import Subscription
from backend.src.core.exceptions import StoreError
from backend.src.core.value_objects.delivery import DeliveryOutcome, DispatchStatus
from backend.src.core.value_objects.notification import LogNotification, TestNotification


class SlowDelivery:
    """Delivery that never answers within the dispatcher's timeout."""

    async def send(self, payload, subscription):
        await asyncio.sleep(5)
        return DeliveryOutcome.DELIVERED


class ExplodingDelivery:
    async def send(self, payload, subscription):
        raise RuntimeError("socket closed")


@pytest.fixture
async def registry() -> InMemorySubscriptionRepository:
    repo = InMemorySubscriptionRepository()
    for endpoint in ("https://push.example.com/a", "https://push.example.com/b"):
        await repo.upsert(Subscription(endpoint=endpoint, user_id="u1", p256dh_key="k", auth_key="s"))
    await repo.upsert(Subscription(endpoint="https://push.example.com/other", user_id="u2"))
    return repo


def _log_notification() -> LogNotification:
    return LogNotification(
        task_id="t1", task_title="Write report", delta_minutes=5, logged_minutes=15, estimate_minutes=30
    )


class TestNotify:
    """Fan-out across all of a user's devices."""

    @pytest.mark.asyncio
    async def test_delivers_to_every_subscription_of_user(self, registry, recording_delivery):
        delivery = recording_delivery
        dispatcher = NotificationDispatcher(subscriptions=registry, delivery=delivery)

        result = await dispatcher.notify("u1", _log_notification())

        assert result.status == DispatchStatus.DELIVERED
        assert result.attempted == 2
        endpoints = sorted(endpoint for endpoint, _ in delivery.sent)
        assert endpoints == ["https://push.example.com/a", "https://push.example.com/b"]
        assert delivery.payloads("log")[0]["body"] == "Write report +5m (15 / 30m)"

    @pytest.mark.asyncio
    async def test_skipped_without_subscriptions(self, registry, recording_delivery):
        delivery = recording_delivery
        dispatcher = NotificationDispatcher(subscriptions=registry, delivery=delivery)

        result = await dispatcher.notify("nobody", TestNotification(title="hi"))

        assert result.status == DispatchStatus.SKIPPED
        assert delivery.sent == []

    @pytest.mark.asyncio
    async def test_gone_endpoint_is_pruned(self, registry, recording_delivery):
        delivery = recording_delivery
        delivery.outcomes["https://push.example.com/a"] = DeliveryOutcome.GONE
        dispatcher = NotificationDispatcher(subscriptions=registry, delivery=delivery)

        result = await dispatcher.notify("u1", _log_notification())

        assert result.status == DispatchStatus.PARTIAL_FAILURE
        assert result.pruned_endpoints == ["https://push.example.com/a"]
        remaining = await registry.list_by_user("u1")
        assert [s.endpoint for s in remaining] == ["https://push.example.com/b"]

    @pytest.mark.asyncio
    async def test_transient_failure_keeps_subscription(self, registry, recording_delivery):
        delivery = recording_delivery
        delivery.outcomes["https://push.example.com/b"] = DeliveryOutcome.TRANSIENT_ERROR
        dispatcher = NotificationDispatcher(subscriptions=registry, delivery=delivery)

        result = await dispatcher.notify("u1", _log_notification())

        assert result.delivered == 1
        assert result.transient_failures == 1
        assert len(await registry.list_by_user("u1")) == 2

    @pytest.mark.asyncio
    async def test_timeout_counts_as_transient(self, registry):
        dispatcher = NotificationDispatcher(
            subscriptions=registry, delivery=SlowDelivery(), timeout_seconds=0.05
        )

        result = await dispatcher.notify("u1", _log_notification())

        assert result.transient_failures == 2
        assert len(await registry.list_by_user("u1")) == 2

    @pytest.mark.asyncio
    async def test_delivery_exception_counts_as_transient(self, registry):
        dispatcher = NotificationDispatcher(subscriptions=registry, delivery=ExplodingDelivery())

        result = await dispatcher.notify("u1", _log_notification())

        assert result.status == DispatchStatus.PARTIAL_FAILURE
        assert result.transient_failures == 2

    @pytest.mark.asyncio
    async def test_registry_failure_raises_store_error(
        self, mock_subscription_repository, recording_delivery
    ):
        mock_subscription_repository.list_by_user.side_effect = ConnectionError("db down")
        dispatcher = NotificationDispatcher(
            subscriptions=mock_subscription_repository, delivery=recording_delivery
        )
        with pytest.raises(StoreError):
            await dispatcher.notify("u1", _log_notification())

    @pytest.mark.asyncio
    async def test_prune_failure_does_not_raise(
        self, sample_subscription, mock_subscription_repository, recording_delivery
    ):
        mock_subscription_repository.list_by_user.return_value = [sample_subscription]
        mock_subscription_repository.delete.side_effect = StoreError("locked")
        delivery = recording_delivery
        delivery.outcomes[sample_subscription.endpoint] = DeliveryOutcome.GONE
        dispatcher = NotificationDispatcher(
            subscriptions=mock_subscription_repository, delivery=delivery
        )

        result = await dispatcher.notify("u1", _log_notification())

        assert result.pruned_endpoints == [sample_subscription.endpoint]
        mock_subscription_repository.delete.assert_awaited_once_with(sample_subscription.endpoint)
