"""Calendar endpoints."""

from fastapi import APIRouter, status

from agenda.dependencies import Calendar
from agenda.schemas.calendar import CalendarResponse

router = APIRouter()


@router.get(
    "/calendar",
    response_model=CalendarResponse,
    status_code=status.HTTP_200_OK,
    summary="Calendar marks",
)
async def get_calendar(calendar: Calendar) -> CalendarResponse:
    """
    Dates to mark on the calendar, with the locale to render it in.

    Returns:
        Marked dates and calendar locale
    """
    return await calendar.get_calendar()
