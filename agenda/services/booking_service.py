"""Booking flow: validate against the day's appointments, persist, then notify."""

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.core.results import ConflictError, InvalidRange, NotFound, ValidationError
from agenda.schemas.appointments import Appointment
from agenda.services.appointment_store import (
    AppointmentStore,
    validate_appointment_changes,
    validate_new_appointment,
)
from agenda.services.notification_platform import LocalNotificationPlatform
from agenda.services.notification_scheduler import NotificationScheduler
from agenda.services.scheduling import find_conflict

logger = structlog.get_logger(__name__)


class BookingService:
    """Service for booking, editing and removing appointments."""

    def __init__(self, store: AppointmentStore, scheduler: NotificationScheduler):
        """Initialize service with the appointment store and reminder scheduler."""
        self.store = store
        self.scheduler = scheduler

    @classmethod
    def for_session(cls, db: AsyncSession) -> "BookingService":
        """Build a booking service backed by the local notification platform."""
        store = AppointmentStore(db)
        return cls(store, NotificationScheduler(store, LocalNotificationPlatform(db)))

    async def book(
        self,
        appointment_date: Any,
        start_time: Any,
        end_time: Any,
        client_name: Any,
        client_phone: Any,
        service: Any,
    ) -> Appointment | ValidationError | InvalidRange | ConflictError:
        """
        Book a new appointment.

        The same-date appointments are fetched right before validating so the
        check sees the latest saved state.
        """
        data = validate_new_appointment(
            appointment_date, start_time, end_time, client_name, client_phone, service
        )
        if isinstance(data, ValidationError):
            return data

        same_date = await self.store.get_by_date(data.date)
        outcome = find_conflict(data.start_time, data.end_time, same_date)
        if isinstance(outcome, InvalidRange | ConflictError):
            logger.info(
                "appointment_rejected",
                date=data.date.isoformat(),
                reason=outcome.message,
            )
            return outcome

        appointment_id = await self.store.create(
            data.date,
            data.start_time,
            data.end_time,
            data.client_name,
            data.client_phone,
            data.service.value,
        )
        if isinstance(appointment_id, ValidationError):
            return appointment_id

        await self.scheduler.schedule_next_day_reminder()

        created = await self.store.get_by_id(appointment_id)
        if isinstance(created, Appointment) and await self.scheduler.schedule_follow_up(created):
            created = created.model_copy(update={"notification_scheduled": True})
        return created

    async def reschedule(
        self,
        appointment_id: int,
        client_name: Any,
        client_phone: Any,
        service: Any,
        start_time: Any,
        end_time: Any,
    ) -> Appointment | ValidationError | NotFound | InvalidRange | ConflictError:
        """Edit an appointment, never comparing it against itself."""
        current = await self.store.get_by_id(appointment_id)
        if isinstance(current, NotFound):
            return current

        data = validate_appointment_changes(
            client_name, client_phone, service, start_time, end_time
        )
        if isinstance(data, ValidationError):
            return data

        same_date = await self.store.get_by_date(current.date)
        outcome = find_conflict(
            data.start_time, data.end_time, same_date, exclude_id=appointment_id
        )
        if isinstance(outcome, InvalidRange | ConflictError):
            logger.info(
                "appointment_update_rejected",
                appointment_id=appointment_id,
                reason=outcome.message,
            )
            return outcome

        return await self.store.update(
            appointment_id,
            data.client_name,
            data.client_phone,
            data.service.value,
            data.start_time,
            data.end_time,
        )

    async def cancel(self, appointment_id: int) -> bool:
        """
        Delete an appointment and cancel its pending reminder.

        Returns:
            True if the appointment existed
        """
        removed = await self.store.delete(appointment_id)
        if removed:
            await self.scheduler.cancel_for_appointment(appointment_id)
        return removed

