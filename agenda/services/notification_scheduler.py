"""Reminder scheduling kept consistent with the appointment lifecycle."""

from collections.abc import Callable
from datetime import date, datetime, time, timedelta

import structlog

from agenda.config import settings
from agenda.core.exceptions import NotificationFailure
from agenda.schemas.appointments import Appointment
from agenda.services.appointment_store import AppointmentStore
from agenda.services.notification_platform import NotificationPlatform

logger = structlog.get_logger(__name__)

DAILY_REMINDER_HANDLE = "daily-reminder"


def next_day_reminder_handle(day: date) -> str:
    """Handle of the "appointments tomorrow" reminder for a given date."""
    return f"next-day-reminder:{day.isoformat()}"


def follow_up_handle(appointment_id: int) -> str:
    """Handle of an appointment's follow-up reminder."""
    return str(appointment_id)


class NotificationScheduler:
    """
    Schedules the studio's reminders on a notification platform.

    Platform failures are logged and swallowed: the appointment write is the
    source of truth and reminders are best-effort.
    """

    def __init__(
        self,
        store: AppointmentStore,
        platform: NotificationPlatform,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """Initialize scheduler with the appointment store and platform."""
        self.store = store
        self.platform = platform
        self.clock = clock

    async def schedule_next_day_reminder(self, now: datetime | None = None) -> str | None:
        """
        Remind tonight about tomorrow's appointments.

        Counts the appointments booked for tomorrow and, if there is at least
        one, schedules a notification for today at the configured hour (21:00).
        A time already past today fires on the next dispatch.

        Returns:
            Notification handle, or None when nothing was scheduled
        """
        now = now or self.clock()
        tomorrow = now.date() + timedelta(days=1)
        upcoming = await self.store.get_by_date(tomorrow)

        if not upcoming:
            logger.info("no_appointments_tomorrow", date=tomorrow.isoformat())
            return None

        fire_at = datetime.combine(
            now.date(),
            time(settings.next_day_reminder_hour, settings.next_day_reminder_minute),
        )
        identifier = (
            next_day_reminder_handle(tomorrow)
            if settings.next_day_reminder_dedupe
            else None
        )

        try:
            handle = await self.platform.schedule_one_time(
                title="Appointment reminder",
                body=f"There are {len(upcoming)} appointment(s) scheduled for tomorrow.",
                fire_at=fire_at,
                identifier=identifier,
            )
        except NotificationFailure as e:
            logger.warning("next_day_reminder_failed", error=e.message)
            return None

        logger.info("next_day_reminder_scheduled", count=len(upcoming), handle=handle)
        return handle

    async def schedule_follow_up(self, appointment: Appointment) -> bool:
        """
        Schedule the follow-up reminder of one appointment.

        The follow-up fires a fixed number of days (28) after the appointment
        date and names the client. The appointment is flagged afterwards so its
        follow-up is scheduled at most once across restarts. A failure leaves
        the flag unset for the next start to retry.

        Returns:
            True if a follow-up was scheduled now
        """
        if appointment.notification_scheduled:
            return False

        fire_at = datetime.combine(
            appointment.date + timedelta(days=settings.follow_up_days),
            time(settings.follow_up_hour),
        )
        try:
            await self.platform.schedule_one_time(
                title="Follow-up reminder",
                body=(
                    f"{appointment.client_name} had an appointment "
                    f"{settings.follow_up_days} days ago."
                ),
                fire_at=fire_at,
                identifier=follow_up_handle(appointment.id),
            )
        except NotificationFailure as e:
            logger.warning(
                "follow_up_reminder_failed",
                appointment_id=appointment.id,
                error=e.message,
            )
            return False

        await self.store.set_notification_scheduled(appointment.id)
        logger.info(
            "follow_up_reminder_scheduled",
            appointment_id=appointment.id,
            fire_at=fire_at.isoformat(),
        )
        return True

    async def schedule_follow_ups(self) -> int:
        """
        Schedule the follow-up reminder of every appointment that lacks one.

        Returns:
            Number of follow-ups scheduled
        """
        scheduled = 0
        for appointment in await self.store.get_all():
            if await self.schedule_follow_up(appointment):
                scheduled += 1
        return scheduled

    async def schedule_daily_reminder(self) -> str | None:
        """Schedule the generic recurring reminder, replacing any previous one."""
        try:
            handle = await self.platform.schedule_recurring_daily(
                title="Daily reminder",
                body="Remember to check your appointments for tomorrow.",
                hour=settings.daily_reminder_hour,
                minute=settings.daily_reminder_minute,
                identifier=DAILY_REMINDER_HANDLE,
            )
        except NotificationFailure as e:
            logger.warning("daily_reminder_failed", error=e.message)
            return None

        return handle

    async def cancel_for_appointment(self, appointment_id: int) -> bool:
        """
        Cancel the notification tied to a deleted appointment.

        Returns:
            True if a pending notification was cancelled
        """
        try:
            return await self.platform.cancel(follow_up_handle(appointment_id))
        except NotificationFailure as e:
            logger.warning(
                "notification_cancel_failed",
                appointment_id=appointment_id,
                error=e.message,
            )
            return False

    async def on_startup(self) -> None:
        """Schedule follow-ups and the daily reminder once per process start."""
        follow_ups = await self.schedule_follow_ups()
        await self.schedule_daily_reminder()
        logger.info("startup_reminders_scheduled", follow_ups=follow_ups)
