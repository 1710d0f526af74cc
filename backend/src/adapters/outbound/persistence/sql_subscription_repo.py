"""SQL implementation of SubscriptionRepositoryPort using SQLAlchemy async."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Text, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.src.adapters.outbound.persistence.sql_task_repo import dialect_insert
from backend.src.core.entities.subscription import Subscription
from backend.src.core.exceptions import StoreError
from backend.src.infrastructure.database import Base

logger = logging.getLogger(__name__)


class SubscriptionModel(Base):  # type: ignore[misc]
    """SQLAlchemy model for the ``subscriptions`` table."""

    __tablename__ = "subscriptions"

    endpoint = Column(Text, primary_key=True)
    user_id = Column(String(255), nullable=False, index=True)
    p256dh_key = Column(Text, nullable=False, default="")
    auth_key = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def to_entity(self) -> Subscription:
        """Convert this ORM row to a domain :class:`Subscription` entity."""
        return Subscription(
            endpoint=self.endpoint,
            user_id=self.user_id,
            p256dh_key=self.p256dh_key,
            auth_key=self.auth_key,
            created_at=self.created_at,
        )


class SqlSubscriptionRepository:
    """Implements :class:`SubscriptionRepositoryPort` backed by a SQL database."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def upsert(self, subscription: Subscription) -> Subscription:
        """Insert a subscription or replace the record stored for its endpoint."""
        try:
            async with self._session_factory() as session:
                insert = dialect_insert(session)
                stmt = insert(SubscriptionModel).values(
                    endpoint=subscription.endpoint,
                    user_id=subscription.user_id,
                    p256dh_key=subscription.p256dh_key,
                    auth_key=subscription.auth_key,
                    created_at=subscription.created_at,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=[SubscriptionModel.endpoint],
                    set_={
                        "user_id": stmt.excluded.user_id,
                        "p256dh_key": stmt.excluded.p256dh_key,
                        "auth_key": stmt.excluded.auth_key,
                        "created_at": stmt.excluded.created_at,
                    },
                )
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to save subscription: {exc}") from exc
        logger.debug("Saved subscription for user %s", subscription.user_id)
        return subscription

    async def list_by_user(self, user_id: str) -> list[Subscription]:
        """Return a user's subscriptions, oldest first."""
        stmt = (
            select(SubscriptionModel)
            .where(SubscriptionModel.user_id == user_id)
            .order_by(SubscriptionModel.created_at)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [row.to_entity() for row in result.scalars().all()]
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to list subscriptions for {user_id}: {exc}") from exc

    async def delete(self, endpoint: str) -> bool:
        """Delete the subscription for *endpoint*. Returns True if a row was removed."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    delete(SubscriptionModel).where(SubscriptionModel.endpoint == endpoint)
                )
                await session.commit()
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to delete subscription: {exc}") from exc
        if result.rowcount == 0:
            logger.debug("No subscription stored for endpoint; nothing deleted")
            return False
        return True
