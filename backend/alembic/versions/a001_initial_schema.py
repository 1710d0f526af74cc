"""Initial schema - subscriptions and tasks tables.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Subscriptions table
    op.create_table(
        "subscriptions",
        sa.Column("endpoint", sa.Text(), primary_key=True),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("p256dh_key", sa.Text(), nullable=False, server_default=""),
        sa.Column("auth_key", sa.Text(), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_subscriptions_user_id", "subscriptions", ["user_id"])

    # Tasks table
    op.create_table(
        "tasks",
        sa.Column("task_id", sa.String(255), primary_key=True),
        sa.Column("milestone_id", sa.String(255), nullable=True),
        sa.Column("goal_id", sa.String(255), nullable=True),
        sa.Column("title", sa.Text(), nullable=False, server_default=""),
        sa.Column("color", sa.String(64), nullable=False, server_default=""),
        sa.Column("estimate_minutes", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("logged_minutes", sa.Integer(), nullable=False, server_default="0"),
        sa.CheckConstraint("estimate_minutes >= 1", name="ck_tasks_estimate_positive"),
        sa.CheckConstraint(
            "logged_minutes >= 0 AND logged_minutes <= estimate_minutes",
            name="ck_tasks_logged_within_estimate",
        ),
    )
    op.create_index("ix_tasks_milestone_id", "tasks", ["milestone_id"])


def downgrade() -> None:
    op.drop_index("ix_tasks_milestone_id", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("ix_subscriptions_user_id", table_name="subscriptions")
    op.drop_table("subscriptions")
