"""Appointment endpoints."""

from datetime import date
from typing import NoReturn

from fastapi import APIRouter, Query, status

from agenda.config import settings
from agenda.core.exceptions import ConflictException, NotFoundException, ValidationException
from agenda.core.results import ConflictError, InvalidRange, NotFound, ValidationError
from agenda.dependencies import Booking, Store
from agenda.schemas.appointments import (
    Appointment,
    AppointmentDatesResponse,
    AppointmentForm,
    AppointmentListResponse,
    AppointmentUpdateForm,
    MessagingLinkResponse,
    Service,
    ServiceCatalogResponse,
)
from agenda.services.messaging import whatsapp_url

router = APIRouter()


def raise_for_outcome(
    outcome: ValidationError | InvalidRange | ConflictError | NotFound,
) -> NoReturn:
    """Translate a rejected booking outcome into an HTTP error."""
    if isinstance(outcome, NotFound):
        raise NotFoundException(outcome.message)
    if isinstance(outcome, ConflictError):
        raise ConflictException(outcome.message)
    if isinstance(outcome, ValidationError):
        raise ValidationException(outcome.message, details=outcome.errors)
    raise ValidationException(outcome.message, details={"end_time": outcome.message})


@router.get(
    "/",
    response_model=AppointmentListResponse,
    status_code=status.HTTP_200_OK,
    summary="List appointments",
)
async def list_appointments(
    store: Store,
    on: date | None = Query(None, alias="date", description="Only appointments on this date"),
) -> AppointmentListResponse:
    """
    List appointments, optionally restricted to one date.

    Args:
        store: Appointment store
        on: Date filter (YYYY-MM-DD)

    Returns:
        Matching appointments
    """
    items = await store.get_by_date(on) if on else await store.get_all()
    return AppointmentListResponse(total=len(items), items=items)


@router.get(
    "/dates",
    response_model=AppointmentDatesResponse,
    status_code=status.HTTP_200_OK,
    summary="Dates with appointments",
)
async def list_appointment_dates(store: Store) -> AppointmentDatesResponse:
    """Every date that has at least one appointment."""
    return AppointmentDatesResponse(dates=sorted(await store.get_distinct_dates()))


@router.get(
    "/services",
    response_model=ServiceCatalogResponse,
    status_code=status.HTTP_200_OK,
    summary="Service catalog",
)
async def list_services() -> ServiceCatalogResponse:
    """Services offered by the studio."""
    return ServiceCatalogResponse(services=[service.value for service in Service])


@router.post(
    "/",
    response_model=Appointment,
    status_code=status.HTTP_201_CREATED,
    summary="Book appointment",
)
async def create_appointment(data: AppointmentForm, booking: Booking) -> Appointment:
    """
    Book a new appointment after checking the date for conflicts.

    Args:
        data: Appointment form
        booking: Booking service

    Returns:
        Created appointment

    Raises:
        ValidationException: If a field is missing or malformed
        ConflictException: If the time slot overlaps another appointment
    """
    outcome = await booking.book(
        data.date,
        data.start_time,
        data.end_time,
        data.client_name,
        data.client_phone,
        data.service,
    )
    if not isinstance(outcome, Appointment):
        raise_for_outcome(outcome)
    return outcome


@router.get(
    "/{appointment_id}",
    response_model=Appointment,
    status_code=status.HTTP_200_OK,
    summary="Get appointment by ID",
)
async def get_appointment(appointment_id: int, store: Store) -> Appointment:
    """
    Get a specific appointment by ID.

    Raises:
        NotFoundException: If appointment not found
    """
    appointment = await store.get_by_id(appointment_id)
    if isinstance(appointment, NotFound):
        raise_for_outcome(appointment)
    return appointment


@router.put(
    "/{appointment_id}",
    response_model=Appointment,
    status_code=status.HTTP_200_OK,
    summary="Update appointment",
)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdateForm,
    booking: Booking,
) -> Appointment:
    """
    Update client details, service and times of an appointment.

    Args:
        appointment_id: Appointment ID
        data: Edit form
        booking: Booking service

    Returns:
        Updated appointment

    Raises:
        NotFoundException: If appointment not found
        ValidationException: If a field is missing or malformed
        ConflictException: If the new time slot overlaps another appointment
    """
    outcome = await booking.reschedule(
        appointment_id,
        data.client_name,
        data.client_phone,
        data.service,
        data.start_time,
        data.end_time,
    )
    if not isinstance(outcome, Appointment):
        raise_for_outcome(outcome)
    return outcome


@router.delete(
    "/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete appointment",
)
async def delete_appointment(appointment_id: int, booking: Booking) -> None:
    """Delete an appointment and cancel its reminder. Unknown ids are ignored."""
    await booking.cancel(appointment_id)


@router.get(
    "/{appointment_id}/whatsapp",
    response_model=MessagingLinkResponse,
    status_code=status.HTTP_200_OK,
    summary="WhatsApp link for the client",
)
async def get_whatsapp_link(appointment_id: int, store: Store) -> MessagingLinkResponse:
    """
    Build the WhatsApp chat link for an appointment's client.

    Raises:
        NotFoundException: If appointment not found
    """
    appointment = await store.get_by_id(appointment_id)
    if isinstance(appointment, NotFound):
        raise_for_outcome(appointment)
    return MessagingLinkResponse(
        appointment_id=appointment.id,
        url=whatsapp_url(appointment.client_phone, settings.phone_country_code),
    )
