"""Appointments table model using SQLAlchemy Core."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    Index,
    Integer,
    String,
    Table,
    Text,
    false,
)

from agenda.models.base import metadata

# Appointments table
appointments = Table(
    "appointments",
    metadata,
    # AUTOINCREMENT keeps ids of deleted rows from being handed out again
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("date", Date, nullable=False),
    # HH:MM, zero-padded so string comparison orders correctly
    Column("start_time", String(5), nullable=False),
    Column("end_time", String(5), nullable=False),
    # Client
    Column("client_name", Text, nullable=False),
    Column("client_phone", String(10), nullable=False),
    Column("service", Text, nullable=False),
    # Follow-up reminder bookkeeping
    Column(
        "notification_scheduled",
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    ),
    CheckConstraint("start_time < end_time", name="appointments_time_range_check"),
    Index("idx_appointments_date", "date"),
    sqlite_autoincrement=True,
)
