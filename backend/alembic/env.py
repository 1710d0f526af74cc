"""
Alembic migration environment for the TempoPush schema.

The database URL always comes from ``Settings``; ``alembic.ini`` carries only
logging configuration.
"""
from __future__ import annotations

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy.engine import Connection

from backend.src.infrastructure.config import Settings
from backend.src.infrastructure.database import Base, get_async_engine

# Import ORM models to register them with Base.metadata
from backend.src.adapters.outbound.persistence.sql_subscription_repo import SubscriptionModel  # noqa: F401
from backend.src.adapters.outbound.persistence.sql_task_repo import TaskModel  # noqa: F401

config = context.config
settings = Settings()

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata

ASYNC_DRIVERS = ("+asyncpg", "+aiosqlite")


def offline_url(url: str) -> str:
    """Strip the async driver so SQL is rendered for the plain dialect."""
    for driver in ASYNC_DRIVERS:
        url = url.replace(driver, "")
    return url


def run_migrations_offline() -> None:
    """Emit migration SQL to stdout without connecting."""
    context.configure(
        url=offline_url(settings.database.url),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def apply_migrations(connection: Connection) -> None:
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite cannot ALTER constraints in place
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply migrations through the application's own async engine."""
    engine = get_async_engine(settings.database.url)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(apply_migrations)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
