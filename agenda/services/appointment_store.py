"""Appointment store: the only component that reads or writes appointments."""

from datetime import date
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.core.exceptions import StorageFailure
from agenda.core.results import NotFound, ValidationError
from agenda.models.appointments import appointments
from agenda.schemas.appointments import Appointment, AppointmentCreate, AppointmentUpdate

logger = structlog.get_logger(__name__)


def validate_new_appointment(
    appointment_date: Any,
    start_time: Any,
    end_time: Any,
    client_name: Any,
    client_phone: Any,
    service: Any,
) -> AppointmentCreate | ValidationError:
    """Validate the fields of a new appointment."""
    try:
        return AppointmentCreate(
            date=appointment_date,
            start_time=start_time,
            end_time=end_time,
            client_name=client_name,
            client_phone=client_phone,
            service=service,
        )
    except PydanticValidationError as e:
        return ValidationError.from_pydantic(e)


def validate_appointment_changes(
    client_name: Any,
    client_phone: Any,
    service: Any,
    start_time: Any,
    end_time: Any,
) -> AppointmentUpdate | ValidationError:
    """Validate the editable fields of an existing appointment."""
    try:
        return AppointmentUpdate(
            start_time=start_time,
            end_time=end_time,
            client_name=client_name,
            client_phone=client_phone,
            service=service,
        )
    except PydanticValidationError as e:
        return ValidationError.from_pydantic(e)


class AppointmentStore:
    """
    Durable collection of the studio's appointments.

    Expected conditions (invalid fields, unknown ids) are returned as result
    values. Only database failures raise, as StorageFailure.
    """

    def __init__(self, db: AsyncSession):
        """Initialize store with database session."""
        self.db = db

    async def _execute(self, stmt: Any, *, commit: bool = False) -> Any:
        try:
            result = await self.db.execute(stmt)
            if commit:
                await self.db.commit()
            return result
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("appointment_storage_failed", error=str(e))
            raise StorageFailure("Could not access the appointment database") from e

    async def create(
        self,
        appointment_date: date | str,
        start_time: str,
        end_time: str,
        client_name: str,
        client_phone: str,
        service: str,
    ) -> int | ValidationError:
        """
        Persist a new appointment.

        Overlap with other appointments is not checked here; callers run the
        scheduling validator first.

        Returns:
            The assigned appointment id, or ValidationError
        """
        data = validate_new_appointment(
            appointment_date, start_time, end_time, client_name, client_phone, service
        )
        if isinstance(data, ValidationError):
            logger.info("appointment_validation_failed", errors=data.errors)
            return data

        stmt = insert(appointments).values(
            date=data.date,
            start_time=data.start_time,
            end_time=data.end_time,
            client_name=data.client_name,
            client_phone=data.client_phone,
            service=data.service.value,
            notification_scheduled=False,
        )
        result = await self._execute(stmt, commit=True)
        appointment_id = result.inserted_primary_key[0]

        logger.info(
            "appointment_created",
            appointment_id=appointment_id,
            date=data.date.isoformat(),
            start_time=data.start_time,
            end_time=data.end_time,
        )
        return appointment_id

    async def get_all(self) -> list[Appointment]:
        """Get every stored appointment."""
        stmt = select(appointments).order_by(appointments.c.date, appointments.c.start_time)
        result = await self._execute(stmt)
        return [Appointment.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def get_by_date(self, appointment_date: date) -> list[Appointment]:
        """Get the appointments booked on a date, earliest first."""
        stmt = (
            select(appointments)
            .where(appointments.c.date == appointment_date)
            .order_by(appointments.c.start_time)
        )
        result = await self._execute(stmt)
        return [Appointment.model_validate(dict(row._mapping)) for row in result.fetchall()]

    async def get_distinct_dates(self) -> set[date]:
        """Get every date that has at least one appointment."""
        stmt = select(appointments.c.date).distinct()
        result = await self._execute(stmt)
        return set(result.scalars().all())

    async def get_by_id(self, appointment_id: int) -> Appointment | NotFound:
        """Get a single appointment, or NotFound when no row matches."""
        stmt = select(appointments).where(appointments.c.id == appointment_id)
        result = await self._execute(stmt)
        row = result.fetchone()

        if not row:
            logger.debug("appointment_not_found", appointment_id=appointment_id)
            return NotFound(appointment_id=appointment_id)

        return Appointment.model_validate(dict(row._mapping))

    async def update(
        self,
        appointment_id: int,
        client_name: str,
        client_phone: str,
        service: str,
        start_time: str,
        end_time: str,
    ) -> Appointment | ValidationError | NotFound:
        """
        Revise client details, service and times of an appointment.

        Fields are validated exactly as on create. Overlap must be checked by
        the caller, excluding the appointment's own id.
        """
        data = validate_appointment_changes(
            client_name, client_phone, service, start_time, end_time
        )
        if isinstance(data, ValidationError):
            logger.info(
                "appointment_validation_failed",
                appointment_id=appointment_id,
                errors=data.errors,
            )
            return data

        stmt = (
            update(appointments)
            .where(appointments.c.id == appointment_id)
            .values(
                client_name=data.client_name,
                client_phone=data.client_phone,
                service=data.service.value,
                start_time=data.start_time,
                end_time=data.end_time,
            )
        )
        result = await self._execute(stmt, commit=True)

        if result.rowcount == 0:
            return NotFound(appointment_id=appointment_id)

        logger.info("appointment_updated", appointment_id=appointment_id)
        return await self.get_by_id(appointment_id)

    async def delete(self, appointment_id: int) -> bool:
        """
        Remove an appointment.

        Deleting an id that does not exist is not an error.

        Returns:
            True if a row was removed
        """
        stmt = delete(appointments).where(appointments.c.id == appointment_id)
        result = await self._execute(stmt, commit=True)
        removed = result.rowcount > 0

        logger.info("appointment_deleted", appointment_id=appointment_id, removed=removed)
        return removed

    async def set_notification_scheduled(self, appointment_id: int) -> None:
        """Record that the follow-up reminder of an appointment has been scheduled."""
        stmt = (
            update(appointments)
            .where(appointments.c.id == appointment_id)
            .values(notification_scheduled=True)
        )
        await self._execute(stmt, commit=True)
