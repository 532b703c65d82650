"""Scheduled local notification model."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Table,
    Text,
    false,
    func,
)

from agenda.models.base import metadata

scheduled_notifications = Table(
    "scheduled_notifications",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Handle returned to callers; re-scheduling the same handle replaces the pending row
    Column("handle", String(100), nullable=False),
    Column("title", Text, nullable=False),
    Column("body", Text, nullable=False),
    # Local wall-clock time
    Column("fire_at", DateTime, nullable=False),
    Column("repeats_daily", Boolean, nullable=False, default=False, server_default=false()),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("sent_at", DateTime, nullable=True),
    Column("failure_reason", Text, nullable=True),
    Column("created_at", DateTime, nullable=False, server_default=func.now()),
    CheckConstraint(
        "status IN ('pending', 'sent', 'failed', 'cancelled', 'replaced')",
        name="scheduled_notifications_status_check",
    ),
    Index("idx_scheduled_notifications_handle", "handle"),
    Index("idx_scheduled_notifications_due", "status", "fire_at"),
)
