"""Database models."""

from agenda.models.appointments import appointments
from agenda.models.base import metadata
from agenda.models.notifications import scheduled_notifications

__all__ = [
    "appointments",
    "metadata",
    "scheduled_notifications",
]
