"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.config import settings
from agenda.database import get_db
from agenda.schemas.calendar import CalendarLocale
from agenda.services.appointment_store import AppointmentStore
from agenda.services.booking_service import BookingService
from agenda.services.calendar_service import CalendarService, resolve_locale
from agenda.services.notification_service import NotificationService


def get_calendar_locale() -> CalendarLocale:
    """Calendar locale selected in settings."""
    return resolve_locale(settings.calendar_locale)


def get_appointment_store(db: Annotated[AsyncSession, Depends(get_db)]) -> AppointmentStore:
    """Appointment store bound to the request's session."""
    return AppointmentStore(db)


def get_booking_service(db: Annotated[AsyncSession, Depends(get_db)]) -> BookingService:
    """Booking service bound to the request's session."""
    return BookingService.for_session(db)


def get_calendar_service(
    store: Annotated[AppointmentStore, Depends(get_appointment_store)],
    locale: Annotated[CalendarLocale, Depends(get_calendar_locale)],
) -> CalendarService:
    """Calendar service with the configured locale."""
    return CalendarService(store, locale)


def get_notification_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NotificationService:
    """Notification delivery service for the configured devices."""
    return NotificationService(db, settings.device_tokens)


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
Store = Annotated[AppointmentStore, Depends(get_appointment_store)]
Booking = Annotated[BookingService, Depends(get_booking_service)]
Calendar = Annotated[CalendarService, Depends(get_calendar_service)]
Notifications = Annotated[NotificationService, Depends(get_notification_service)]
