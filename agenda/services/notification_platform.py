"""Local notification scheduling backed by the application database."""

from collections.abc import Callable
from datetime import datetime, time, timedelta
from typing import Any, Protocol
from uuid import uuid4

import structlog
from sqlalchemy import insert, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.core.exceptions import NotificationFailure
from agenda.models.notifications import scheduled_notifications
from agenda.schemas.notifications import NotificationStatus

logger = structlog.get_logger(__name__)


class NotificationPlatform(Protocol):
    """Platform service that fires local notifications at wall-clock times."""

    async def schedule_one_time(
        self,
        title: str,
        body: str,
        fire_at: datetime,
        identifier: str | None = None,
    ) -> str: ...

    async def schedule_recurring_daily(
        self,
        title: str,
        body: str,
        hour: int,
        minute: int,
        identifier: str | None = None,
    ) -> str: ...

    async def cancel(self, handle: str) -> bool: ...


def next_daily_occurrence(now: datetime, hour: int, minute: int) -> datetime:
    """Get the first time at or after now that matches hour:minute."""
    candidate = datetime.combine(now.date(), time(hour, minute))
    if candidate < now:
        candidate += timedelta(days=1)
    return candidate


class LocalNotificationPlatform:
    """
    Notification platform that keeps schedules in ``scheduled_notifications``.

    Handles are the caller's identifier when given, so scheduling twice with
    the same identifier replaces the pending notification. Delivery is done
    by the notification dispatcher.
    """

    def __init__(self, db: AsyncSession, clock: Callable[[], datetime] = datetime.now):
        """Initialize platform with database session and local clock."""
        self.db = db
        self.clock = clock

    async def _execute(self, *stmts: Any) -> list[Any]:
        try:
            results = [await self.db.execute(stmt) for stmt in stmts]
            await self.db.commit()
            return results
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise NotificationFailure(f"Notification store unavailable: {e}") from e

    async def _replace(
        self,
        handle: str,
        title: str,
        body: str,
        fire_at: datetime,
        repeats_daily: bool,
    ) -> str:
        await self._execute(
            update(scheduled_notifications)
            .where(
                scheduled_notifications.c.handle == handle,
                scheduled_notifications.c.status == NotificationStatus.PENDING.value,
            )
            .values(status=NotificationStatus.REPLACED.value),
            insert(scheduled_notifications).values(
                handle=handle,
                title=title,
                body=body,
                fire_at=fire_at,
                repeats_daily=repeats_daily,
                status=NotificationStatus.PENDING.value,
            ),
        )
        logger.info(
            "notification_scheduled",
            handle=handle,
            fire_at=fire_at.isoformat(),
            repeats_daily=repeats_daily,
        )
        return handle

    async def schedule_one_time(
        self,
        title: str,
        body: str,
        fire_at: datetime,
        identifier: str | None = None,
    ) -> str:
        """Schedule a notification that fires once at fire_at."""
        return await self._replace(identifier or uuid4().hex, title, body, fire_at, False)

    async def schedule_recurring_daily(
        self,
        title: str,
        body: str,
        hour: int,
        minute: int,
        identifier: str | None = None,
    ) -> str:
        """Schedule a notification that fires every day at hour:minute."""
        fire_at = next_daily_occurrence(self.clock(), hour, minute)
        return await self._replace(identifier or uuid4().hex, title, body, fire_at, True)

    async def cancel(self, handle: str) -> bool:
        """
        Cancel the pending notification with the given handle.

        Returns:
            True if a pending notification was cancelled
        """
        (result,) = await self._execute(
            update(scheduled_notifications)
            .where(
                scheduled_notifications.c.handle == handle,
                scheduled_notifications.c.status == NotificationStatus.PENDING.value,
            )
            .values(status=NotificationStatus.CANCELLED.value)
        )
        cancelled = result.rowcount > 0
        logger.info("notification_cancelled", handle=handle, cancelled=cancelled)
        return cancelled
