"""Calendar view of booked dates."""

from agenda.schemas.calendar import LOCALES, CalendarLocale, CalendarResponse, MarkedDate
from agenda.services.appointment_store import AppointmentStore


def resolve_locale(code: str) -> CalendarLocale:
    """Look up a calendar locale by code."""
    try:
        return LOCALES[code]
    except KeyError:
        raise ValueError(f"Unsupported calendar locale: {code}") from None


class CalendarService:
    """Builds the calendar marks shown on the home screen."""

    def __init__(self, store: AppointmentStore, locale: CalendarLocale):
        """Initialize service with the appointment store and calendar locale."""
        self.store = store
        self.locale = locale

    async def get_calendar(self) -> CalendarResponse:
        """Mark every date that has at least one appointment."""
        dates = await self.store.get_distinct_dates()
        return CalendarResponse(
            locale=self.locale,
            marked_dates={day: MarkedDate() for day in sorted(dates)},
        )
