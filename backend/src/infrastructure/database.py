"""
SQLAlchemy async database setup.
"""
from __future__ import annotations

import logging

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)

metadata = MetaData()


class Base(DeclarativeBase):
    metadata = metadata


def get_async_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create async SQLAlchemy engine."""
    if database_url.startswith("sqlite"):
        # SQLite serializes writers itself; wait on a locked DB instead of failing.
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"timeout": 5},
        )
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    """Create any missing tables for the registered ORM models."""
    # Import ORM models to register them with Base.metadata
    from backend.src.adapters.outbound.persistence import sql_subscription_repo, sql_task_repo  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")
