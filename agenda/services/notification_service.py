"""Notification delivery via FCM for due local reminders."""

from collections.abc import Callable
from datetime import datetime, timedelta

import structlog
from firebase_admin import messaging
from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.models.notifications import scheduled_notifications
from agenda.schemas.notifications import (
    DispatchResponse,
    NotificationStatus,
    ScheduledNotificationResponse,
)

logger = structlog.get_logger(__name__)


class NotificationService:
    """Service for delivering scheduled notifications to the studio's devices."""

    def __init__(
        self,
        db: AsyncSession,
        device_tokens: list[str],
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize service with database session and target devices."""
        self.db = db
        self.device_tokens = device_tokens
        self.clock = clock

    @staticmethod
    async def send_push_notification(
        tokens: list[str],
        title: str,
        body: str,
        data: dict[str, str] | None = None,
    ) -> tuple[int, int]:
        """
        Send push notification to multiple devices.

        Args:
            tokens: List of FCM tokens
            title: Notification title
            body: Notification body
            data: Optional data payload

        Returns:
            Tuple of (success_count, failure_count)
        """
        if not tokens:
            logger.warning("no_tokens_provided", title=title)
            return 0, 0

        try:
            message = messaging.MulticastMessage(
                notification=messaging.Notification(
                    title=title,
                    body=body,
                ),
                data=data or {},
                tokens=tokens,
                android=messaging.AndroidConfig(
                    priority="high",
                    notification=messaging.AndroidNotification(
                        sound="default",
                        priority="high",
                    ),
                ),
            )

            response = messaging.send_each_for_multicast(message)

            logger.info(
                "push_notification_sent",
                title=title,
                success_count=response.success_count,
                failure_count=response.failure_count,
            )

            return response.success_count, response.failure_count

        except Exception as e:
            logger.error("push_notification_failed", error=str(e), title=title)
            return 0, len(tokens)

    async def list_pending(self) -> list[ScheduledNotificationResponse]:
        """List pending notifications, soonest first."""
        stmt = (
            select(scheduled_notifications)
            .where(scheduled_notifications.c.status == NotificationStatus.PENDING.value)
            .order_by(scheduled_notifications.c.fire_at)
        )
        result = await self.db.execute(stmt)
        return [
            ScheduledNotificationResponse.model_validate(dict(row._mapping))
            for row in result.fetchall()
        ]

    async def dispatch_due(self, now: datetime | None = None) -> DispatchResponse:
        """
        Deliver every pending notification whose fire time has passed.

        One-time notifications end as sent or failed. Daily notifications stay
        pending and move to their next occurrence.

        Args:
            now: Local time to dispatch against

        Returns:
            Delivered and failed counts
        """
        now = now or self.clock()
        stmt = (
            select(scheduled_notifications)
            .where(
                scheduled_notifications.c.status == NotificationStatus.PENDING.value,
                scheduled_notifications.c.fire_at <= now,
            )
            .order_by(scheduled_notifications.c.fire_at, scheduled_notifications.c.id)
        )
        result = await self.db.execute(stmt)
        due = result.fetchall()

        delivered = failed = 0

        for row in due:
            if not self.device_tokens:
                success_count, failure_count = 0, 0
                failure_reason = "No device tokens configured"
            else:
                success_count, failure_count = await NotificationService.send_push_notification(
                    tokens=self.device_tokens,
                    title=row.title,
                    body=row.body,
                    data={"handle": row.handle},
                )
                failure_reason = None if success_count else "FCM delivery failed"

            if success_count > 0:
                delivered += 1
            else:
                failed += 1

            values: dict = {
                "sent_at": now if success_count > 0 else None,
                "failure_reason": failure_reason,
            }
            if row.repeats_daily:
                next_fire = row.fire_at
                while next_fire <= now:
                    next_fire += timedelta(days=1)
                values["fire_at"] = next_fire
            else:
                values["status"] = (
                    NotificationStatus.SENT.value
                    if success_count > 0
                    else NotificationStatus.FAILED.value
                )

            try:
                await self.db.execute(
                    update(scheduled_notifications)
                    .where(scheduled_notifications.c.id == row.id)
                    .values(**values)
                )
                await self.db.commit()
            except SQLAlchemyError as e:
                # Only this row stays pending; rows already committed keep their status
                await self.db.rollback()
                logger.error(
                    "notification_status_update_failed",
                    handle=row.handle,
                    error=str(e),
                )
                continue

            logger.info(
                "notification_dispatched",
                handle=row.handle,
                success_count=success_count,
                failure_count=failure_count,
            )

        return DispatchResponse(delivered=delivered, failed=failed)

    async def count_pending(self) -> int:
        """Number of notifications still waiting to be delivered."""
        stmt = (
            select(func.count())
            .select_from(scheduled_notifications)
            .where(scheduled_notifications.c.status == NotificationStatus.PENDING.value)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one()
