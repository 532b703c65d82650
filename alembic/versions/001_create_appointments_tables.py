"""create appointments and scheduled_notifications tables

Revision ID: 001
Revises:
Create Date: 2025-02-10 12:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the appointment table and the local notification schedule."""
    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("client_name", sa.Text(), nullable=False),
        sa.Column("client_phone", sa.String(10), nullable=False),
        sa.Column("service", sa.Text(), nullable=False),
        sa.Column(
            "notification_scheduled",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("start_time < end_time", name="appointments_time_range_check"),
        sqlite_autoincrement=True,
    )
    op.create_index("idx_appointments_date", "appointments", ["date"])

    op.create_table(
        "scheduled_notifications",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("handle", sa.String(100), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("fire_at", sa.DateTime(), nullable=False),
        sa.Column("repeats_daily", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        sa.Column("sent_at", sa.DateTime(), nullable=True),
        sa.Column("failure_reason", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "status IN ('pending', 'sent', 'failed', 'cancelled', 'replaced')",
            name="scheduled_notifications_status_check",
        ),
    )
    op.create_index(
        "idx_scheduled_notifications_handle", "scheduled_notifications", ["handle"]
    )
    op.create_index(
        "idx_scheduled_notifications_due", "scheduled_notifications", ["status", "fire_at"]
    )


def downgrade() -> None:
    """Drop both tables."""
    op.drop_index("idx_scheduled_notifications_due", table_name="scheduled_notifications")
    op.drop_index("idx_scheduled_notifications_handle", table_name="scheduled_notifications")
    op.drop_table("scheduled_notifications")
    op.drop_index("idx_appointments_date", table_name="appointments")
    op.drop_table("appointments")
