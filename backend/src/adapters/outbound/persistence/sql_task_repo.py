"""SQL implementation of TaskRepositoryPort using SQLAlchemy async.

Works against SQLite (aiosqlite) and PostgreSQL (asyncpg). Every mutation is a
single statement so concurrent logs on one task can never lose an update.
"""

from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import CheckConstraint, Column, Integer, String, Text, case, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from backend.src.core.entities.task import MAX_MINUTES, Task
from backend.src.core.exceptions import StoreError
from backend.src.core.value_objects.progress import AppliedLog
from backend.src.infrastructure.database import Base

logger = logging.getLogger(__name__)


class TaskModel(Base):  # type: ignore[misc]
    """SQLAlchemy model for the ``tasks`` table."""

    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("estimate_minutes >= 1", name="ck_tasks_estimate_positive"),
        CheckConstraint(
            "logged_minutes >= 0 AND logged_minutes <= estimate_minutes",
            name="ck_tasks_logged_within_estimate",
        ),
    )

    task_id = Column(String(255), primary_key=True)
    milestone_id = Column(String(255), nullable=True, index=True)
    goal_id = Column(String(255), nullable=True)
    title = Column(Text, nullable=False, default="")
    color = Column(String(64), nullable=False, default="")
    estimate_minutes = Column(Integer, nullable=False, default=1)
    logged_minutes = Column(Integer, nullable=False, default=0)

    # -- conversion helpers ----------------------------------------------------

    def to_entity(self) -> Task:
        """Convert this ORM row to a domain :class:`Task` entity."""
        return Task(
            task_id=self.task_id,
            title=self.title,
            color=self.color or "",
            milestone_id=self.milestone_id,
            goal_id=self.goal_id,
            estimate_minutes=self.estimate_minutes,
            logged_minutes=self.logged_minutes,
        )


def dialect_insert(session: AsyncSession):
    """Return the dialect's ``insert`` construct, which supports ON CONFLICT."""
    name = session.get_bind().dialect.name
    if name == "postgresql":
        return pg_insert
    if name == "sqlite":
        return sqlite_insert
    raise StoreError(f"Unsupported database dialect: {name}")


class SqlTaskRepository:
    """Implements :class:`TaskRepositoryPort` backed by a SQL database."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    # -- TaskRepositoryPort implementation -------------------------------------

    async def ensure(self, seed: Task) -> bool:
        """Insert *seed* unless the task already exists. Returns True if inserted."""
        try:
            async with self._session_factory() as session:
                insert = dialect_insert(session)
                stmt = (
                    insert(TaskModel)
                    .values(
                        task_id=seed.task_id,
                        milestone_id=seed.milestone_id,
                        goal_id=seed.goal_id,
                        title=seed.title,
                        color=seed.color,
                        estimate_minutes=seed.estimate_minutes,
                        logged_minutes=0,
                    )
                    .on_conflict_do_nothing(index_elements=[TaskModel.task_id])
                )
                result = await session.execute(stmt)
                await session.commit()
                return result.rowcount == 1
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to seed task {seed.task_id}: {exc}") from exc

    async def add_logged_minutes(self, task_id: str, delta_minutes: int) -> Optional[AppliedLog]:
        """Atomic increment-and-clamp; saturated tasks are left untouched."""
        table = TaskModel.__table__
        # Any delta past MAX_MINUTES saturates the same way and still binds as int4.
        delta = min(delta_minutes, MAX_MINUTES)
        headroom = table.c.estimate_minutes - table.c.logged_minutes
        stmt = (
            update(table)
            .where(
                table.c.task_id == task_id,
                table.c.logged_minutes < table.c.estimate_minutes,
            )
            .values(
                logged_minutes=case(
                    (headroom <= delta, table.c.estimate_minutes),
                    else_=table.c.logged_minutes + delta,
                )
            )
            .returning(*table.c)
        )
        try:
            async with self._session_factory() as session:
                row = (await session.execute(stmt)).mappings().first()
                await session.commit()
                if row is not None:
                    logger.debug(
                        "Task %s logged %d/%d", task_id, row["logged_minutes"], row["estimate_minutes"]
                    )
                    return AppliedLog(task=TaskModel(**row).to_entity(), changed=True)

                current = await session.get(TaskModel, task_id)
                if current is None:
                    logger.warning("Cannot log time: task %s not found", task_id)
                    return None
                return AppliedLog(task=current.to_entity(), changed=False)
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to log time on task {task_id}: {exc}") from exc

    async def get_by_id(self, task_id: str) -> Optional[Task]:
        """Fetch a single task by primary key."""
        try:
            async with self._session_factory() as session:
                row = await session.get(TaskModel, task_id)
                return row.to_entity() if row is not None else None
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to load task {task_id}: {exc}") from exc

    async def count_incomplete_in_milestone(self, milestone_id: str) -> int:
        stmt = select(func.count()).select_from(TaskModel).where(
            TaskModel.milestone_id == milestone_id,
            TaskModel.logged_minutes < TaskModel.estimate_minutes,
        )
        try:
            async with self._session_factory() as session:
                return int((await session.execute(stmt)).scalar_one())
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to scan milestone {milestone_id}: {exc}") from exc

    async def list_by_milestone(self, milestone_id: str) -> list[Task]:
        """Return every task of a milestone ordered by id."""
        stmt = (
            select(TaskModel)
            .where(TaskModel.milestone_id == milestone_id)
            .order_by(TaskModel.task_id)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                return [row.to_entity() for row in result.scalars().all()]
        except SQLAlchemyError as exc:
            raise StoreError(f"Failed to list milestone {milestone_id}: {exc}") from exc
