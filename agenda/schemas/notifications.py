"""Local notification schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class NotificationStatus(str, Enum):
    """Lifecycle of a scheduled notification."""

    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REPLACED = "replaced"


class ScheduledNotificationResponse(BaseModel):
    """Schema for a scheduled notification."""

    id: int
    handle: str
    title: str
    body: str
    fire_at: datetime
    repeats_daily: bool
    status: NotificationStatus
    sent_at: datetime | None = None
    failure_reason: str | None = None

    model_config = {"from_attributes": True}


class ScheduledNotificationListResponse(BaseModel):
    """Schema for pending notifications list response."""

    total: int
    items: list[ScheduledNotificationResponse]


class DispatchResponse(BaseModel):
    """Outcome of delivering due notifications."""

    delivered: int
    failed: int
