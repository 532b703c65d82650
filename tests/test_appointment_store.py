"""Tests for the appointment store."""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from agenda.core.exceptions import StorageFailure
from agenda.core.results import NotFound, ValidationError
from agenda.schemas.appointments import Appointment
from agenda.services.appointment_store import AppointmentStore

FIELDS = {
    "appointment_date": "2024-06-10",
    "start_time": "08:00",
    "end_time": "09:00",
    "client_name": "Laura Gómez",
    "client_phone": "3001234567",
    "service": "Polygel",
}


@pytest.mark.asyncio
async def test_create_then_get_by_id_round_trip(store: AppointmentStore) -> None:
    """Test that a created appointment reads back with its id and an unset flag."""
    appointment_id = await store.create(**FIELDS)
    assert isinstance(appointment_id, int)

    appointment = await store.get_by_id(appointment_id)

    assert appointment == Appointment(
        id=appointment_id,
        date=date(2024, 6, 10),
        start_time="08:00",
        end_time="09:00",
        client_name="Laura Gómez",
        client_phone="3001234567",
        service="Polygel",
        notification_scheduled=False,
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("phone", ["12345", "123456789a", "12345678901", "١٢٣٤٥٦٧٨٩٠"])
async def test_create_rejects_malformed_phone(store: AppointmentStore, phone: str) -> None:
    """Test that the phone must be exactly 10 ASCII digits."""
    result = await store.create(**{**FIELDS, "client_phone": phone})

    assert isinstance(result, ValidationError)
    assert "client_phone" in result.errors
    assert await store.get_all() == []


@pytest.mark.asyncio
async def test_create_accepts_ten_digit_phone(store: AppointmentStore) -> None:
    """Test that a 10 digit phone is accepted."""
    result = await store.create(**{**FIELDS, "client_phone": "1234567890"})
    assert isinstance(result, int)


@pytest.mark.asyncio
async def test_create_rejects_start_after_end(store: AppointmentStore) -> None:
    """Test that start must come before end regardless of the other fields."""
    result = await store.create(**{**FIELDS, "start_time": "14:00", "end_time": "13:00"})

    assert isinstance(result, ValidationError)
    assert "end_time" in result.errors


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("client_name", ""),
        ("client_name", "   "),
        ("client_name", None),
        ("service", "Gel X"),
        ("start_time", "8:00"),
        ("end_time", "25:00"),
        ("appointment_date", "10/06/2024"),
    ],
)
async def test_create_rejects_missing_or_malformed_fields(
    store: AppointmentStore, field: str, value: object
) -> None:
    """Test field validation on create."""
    result = await store.create(**{**FIELDS, field: value})
    assert isinstance(result, ValidationError)


@pytest.mark.asyncio
async def test_get_by_id_returns_not_found(store: AppointmentStore) -> None:
    """Test that a missing id is reported, not raised."""
    result = await store.get_by_id(999)

    assert result == NotFound(appointment_id=999)


@pytest.mark.asyncio
async def test_get_by_date_and_distinct_dates(store: AppointmentStore) -> None:
    """Test date-partitioned queries."""
    await store.create(**{**FIELDS, "start_time": "10:00", "end_time": "11:00"})
    await store.create(**FIELDS)
    await store.create(**{**FIELDS, "appointment_date": "2024-06-12"})

    same_day = await store.get_by_date(date(2024, 6, 10))
    assert [a.start_time for a in same_day] == ["08:00", "10:00"]

    assert await store.get_by_date(date(2024, 6, 11)) == []
    assert await store.get_distinct_dates() == {date(2024, 6, 10), date(2024, 6, 12)}
    assert len(await store.get_all()) == 3


@pytest.mark.asyncio
async def test_update_revises_fields_but_not_date(store: AppointmentStore) -> None:
    """Test updating client details, service and times."""
    appointment_id = await store.create(**FIELDS)

    result = await store.update(
        appointment_id,
        client_name="Laura G.",
        client_phone="3109876543",
        service="Pies",
        start_time="09:00",
        end_time="10:30",
    )

    assert isinstance(result, Appointment)
    assert result.client_name == "Laura G."
    assert result.service == "Pies"
    assert (result.start_time, result.end_time) == ("09:00", "10:30")
    assert result.date == date(2024, 6, 10)


@pytest.mark.asyncio
async def test_update_validates_like_create(store: AppointmentStore) -> None:
    """Test that update rejects the same malformed input as create."""
    appointment_id = await store.create(**FIELDS)

    result = await store.update(appointment_id, "Laura", "12345", "Pies", "09:00", "10:00")

    assert isinstance(result, ValidationError)
    unchanged = await store.get_by_id(appointment_id)
    assert unchanged.client_phone == "3001234567"


@pytest.mark.asyncio
async def test_update_unknown_id(store: AppointmentStore) -> None:
    """Test that updating a missing appointment returns NotFound."""
    result = await store.update(42, "Laura", "3001234567", "Pies", "09:00", "10:00")

    assert result == NotFound(appointment_id=42)


@pytest.mark.asyncio
async def test_delete_is_idempotent_and_ids_are_not_reused(store: AppointmentStore) -> None:
    """Test that deletes never fail and a deleted id is never handed out again."""
    first_id = await store.create(**FIELDS)

    assert await store.delete(first_id) is True
    assert await store.delete(first_id) is False
    assert isinstance(await store.get_by_id(first_id), NotFound)

    second_id = await store.create(**FIELDS)
    assert second_id > first_id


@pytest.mark.asyncio
async def test_set_notification_scheduled(store: AppointmentStore) -> None:
    """Test the one-way follow-up flag."""
    appointment_id = await store.create(**FIELDS)

    await store.set_notification_scheduled(appointment_id)
    await store.set_notification_scheduled(appointment_id)

    appointment = await store.get_by_id(appointment_id)
    assert appointment.notification_scheduled is True


@pytest.mark.asyncio
async def test_database_errors_raise_storage_failure() -> None:
    """Test that database failures propagate as StorageFailure."""
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT", {}, Exception("disk I/O error"))
    store = AppointmentStore(session)

    with pytest.raises(StorageFailure):
        await store.get_all()

    session.rollback.assert_awaited_once()
