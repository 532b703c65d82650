"""Tests for appointment endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from agenda.dependencies import get_notification_service
from agenda.main import app


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test health check endpoint."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


@pytest.mark.asyncio
async def test_detailed_health_counts_pending_reminders(
    client: AsyncClient, sample_appointment_data: dict
) -> None:
    """Test that the detailed health check reads the reminder table."""
    response = await client.get("/api/v1/health/detailed")
    assert response.status_code == 200
    data = response.json()
    assert data["database"] == "healthy"
    assert data["reminders"] == "healthy"
    assert data["pending_reminders"] == 0

    await client.post("/api/v1/appointments/", json=sample_appointment_data)

    response = await client.get("/api/v1/health/detailed")
    assert response.json()["pending_reminders"] == 1


@pytest.mark.asyncio
async def test_detailed_health_reports_unavailable_reminders(client: AsyncClient) -> None:
    """Test that an unreadable reminder table degrades without failing the check."""
    failing = MagicMock()
    failing.count_pending = AsyncMock(
        side_effect=OperationalError("SELECT", {}, Exception("no such table"))
    )
    app.dependency_overrides[get_notification_service] = lambda: failing

    response = await client.get("/api/v1/health/detailed")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["reminders"] == "unavailable"
    assert data["pending_reminders"] is None


@pytest.mark.asyncio
async def test_create_appointment(client: AsyncClient, sample_appointment_data: dict) -> None:
    """Test booking an appointment."""
    response = await client.post("/api/v1/appointments/", json=sample_appointment_data)
    assert response.status_code == 201
    data = response.json()
    assert data["client_name"] == sample_appointment_data["client_name"]
    assert data["date"] == "2024-06-10"
    assert data["notification_scheduled"] is True
    assert isinstance(data["id"], int)


@pytest.mark.asyncio
async def test_create_conflicting_appointment(
    client: AsyncClient, sample_appointment_data: dict
) -> None:
    """Test that an overlapping booking is rejected with the existing appointment's details."""
    await client.post("/api/v1/appointments/", json=sample_appointment_data)

    response = await client.post(
        "/api/v1/appointments/",
        json={**sample_appointment_data, "start_time": "08:30", "end_time": "09:30"},
    )
    assert response.status_code == 409
    data = response.json()
    assert data["error"] == "ConflictException"
    assert "Laura Gómez" in data["message"]
    assert "8:00 AM - 9:00 AM" in data["message"]

    adjacent = await client.post(
        "/api/v1/appointments/",
        json={**sample_appointment_data, "start_time": "09:00", "end_time": "10:00"},
    )
    assert adjacent.status_code == 201


@pytest.mark.asyncio
async def test_invalid_appointment_data(client: AsyncClient) -> None:
    """Test booking with missing and malformed fields."""
    invalid_data = {
        "date": "2024-06-10",
        "start_time": "08:00",
        "end_time": "09:00",
        "client_name": "",
        "client_phone": "12345",
        "service": "Tradicional",
    }

    response = await client.post("/api/v1/appointments/", json=invalid_data)
    assert response.status_code == 422
    details = response.json()["details"]
    assert "client_name" in details
    assert "client_phone" in details


@pytest.mark.asyncio
async def test_list_appointments_by_date(
    client: AsyncClient, sample_appointment_data: dict
) -> None:
    """Test listing the appointments of one date."""
    await client.post("/api/v1/appointments/", json=sample_appointment_data)
    await client.post(
        "/api/v1/appointments/", json={**sample_appointment_data, "date": "2024-06-11"}
    )

    response = await client.get("/api/v1/appointments/", params={"date": "2024-06-10"})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["items"][0]["date"] == "2024-06-10"

    everything = await client.get("/api/v1/appointments/")
    assert everything.json()["total"] == 2

    dates = await client.get("/api/v1/appointments/dates")
    assert dates.json()["dates"] == ["2024-06-10", "2024-06-11"]


@pytest.mark.asyncio
async def test_get_appointment(client: AsyncClient, sample_appointment_data: dict) -> None:
    """Test getting a specific appointment."""
    create_response = await client.post("/api/v1/appointments/", json=sample_appointment_data)
    appointment_id = create_response.json()["id"]

    response = await client.get(f"/api/v1/appointments/{appointment_id}")
    assert response.status_code == 200
    assert response.json()["id"] == appointment_id

    missing = await client.get("/api/v1/appointments/9999")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_appointment(client: AsyncClient, sample_appointment_data: dict) -> None:
    """Test editing an appointment in place."""
    create_response = await client.post("/api/v1/appointments/", json=sample_appointment_data)
    appointment_id = create_response.json()["id"]

    update_data = {
        "client_name": "Laura G.",
        "client_phone": "3001234567",
        "service": "Pies",
        "start_time": "08:00",
        "end_time": "09:30",
    }
    response = await client.put(f"/api/v1/appointments/{appointment_id}", json=update_data)
    assert response.status_code == 200
    data = response.json()
    assert data["client_name"] == "Laura G."
    assert data["end_time"] == "09:30"

    missing = await client.put("/api/v1/appointments/9999", json=update_data)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_delete_appointment(client: AsyncClient, sample_appointment_data: dict) -> None:
    """Test that deleting twice is not an error."""
    create_response = await client.post("/api/v1/appointments/", json=sample_appointment_data)
    appointment_id = create_response.json()["id"]

    response = await client.delete(f"/api/v1/appointments/{appointment_id}")
    assert response.status_code == 204

    again = await client.delete(f"/api/v1/appointments/{appointment_id}")
    assert again.status_code == 204

    get_response = await client.get(f"/api/v1/appointments/{appointment_id}")
    assert get_response.status_code == 404


@pytest.mark.asyncio
async def test_whatsapp_link(client: AsyncClient, sample_appointment_data: dict) -> None:
    """Test the client messaging deep link."""
    create_response = await client.post("/api/v1/appointments/", json=sample_appointment_data)
    appointment_id = create_response.json()["id"]

    response = await client.get(f"/api/v1/appointments/{appointment_id}/whatsapp")
    assert response.status_code == 200
    assert response.json()["url"] == "https://wa.me/+573001234567"


@pytest.mark.asyncio
async def test_service_catalog(client: AsyncClient) -> None:
    """Test listing the offered services."""
    response = await client.get("/api/v1/appointments/services")
    assert response.status_code == 200
    assert response.json()["services"] == [
        "Tradicional",
        "Semipermanente",
        "PressOn",
        "Polygel",
        "Acrílico",
        "Pies",
    ]


@pytest.mark.asyncio
async def test_calendar_marks_booked_dates(
    client: AsyncClient, sample_appointment_data: dict
) -> None:
    """Test calendar marks and locale."""
    await client.post("/api/v1/appointments/", json=sample_appointment_data)

    response = await client.get("/api/v1/calendar")
    assert response.status_code == 200
    data = response.json()
    assert data["locale"]["code"] == "es"
    assert data["locale"]["month_names"][0] == "Enero"
    assert data["marked_dates"]["2024-06-10"]["marked"] is True


@pytest.mark.asyncio
async def test_list_scheduled_notifications(client: AsyncClient) -> None:
    """Test listing pending reminders."""
    response = await client.get("/api/v1/notifications/scheduled")
    assert response.status_code == 200
    assert response.json() == {"total": 0, "items": []}
