import os
from collections.abc import AsyncGenerator
from datetime import date, datetime, timedelta

import pytest
import pytest_asyncio
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Never touch the studio's real database file from tests
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from agenda.core.exceptions import NotificationFailure
from agenda.database import get_db
from agenda.main import app
from agenda.models import metadata
from agenda.schemas.appointments import Appointment
from agenda.services.appointment_store import AppointmentStore
from agenda.services.booking_service import BookingService
from agenda.services.notification_platform import LocalNotificationPlatform
from agenda.services.notification_scheduler import NotificationScheduler

# Fixed local wall-clock time used by reminder tests
NOW = datetime(2024, 6, 9, 10, 0)
TODAY = NOW.date()
TOMORROW = TODAY + timedelta(days=1)


class FakeNotificationPlatform:
    """Records scheduling calls instead of firing notifications."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.one_time: list[dict] = []
        self.recurring: list[dict] = []
        self.cancelled: list[str] = []

    async def schedule_one_time(self, title, body, fire_at, identifier=None) -> str:
        if self.fail:
            raise NotificationFailure("platform unavailable")
        handle = identifier or f"handle-{len(self.one_time)}"
        self.one_time.append(
            {"title": title, "body": body, "fire_at": fire_at, "handle": handle}
        )
        return handle

    async def schedule_recurring_daily(self, title, body, hour, minute, identifier=None) -> str:
        if self.fail:
            raise NotificationFailure("platform unavailable")
        handle = identifier or f"recurring-{len(self.recurring)}"
        self.recurring.append(
            {"title": title, "body": body, "hour": hour, "minute": minute, "handle": handle}
        )
        return handle

    async def cancel(self, handle: str) -> bool:
        if self.fail:
            raise NotificationFailure("platform unavailable")
        self.cancelled.append(handle)
        return True


def make_appointment(
    appointment_id: int,
    start_time: str,
    end_time: str,
    appointment_date: date = date(2024, 6, 10),
) -> Appointment:
    """Build an in-memory appointment for validator tests."""
    return Appointment(
        id=appointment_id,
        date=appointment_date,
        start_time=start_time,
        end_time=end_time,
        client_name=f"Client {appointment_id}",
        client_phone="3001234567",
        service="Tradicional",
    )


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a session on a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def store(db_session: AsyncSession) -> AppointmentStore:
    """Appointment store on the test database."""
    return AppointmentStore(db_session)


@pytest.fixture
def fake_platform() -> FakeNotificationPlatform:
    """Notification platform that only records calls."""
    return FakeNotificationPlatform()


@pytest.fixture
def local_platform(db_session: AsyncSession) -> LocalNotificationPlatform:
    """Database-backed notification platform with a fixed clock."""
    return LocalNotificationPlatform(db_session, clock=lambda: NOW)


@pytest.fixture
def scheduler(
    store: AppointmentStore, fake_platform: FakeNotificationPlatform
) -> NotificationScheduler:
    """Reminder scheduler over the fake platform."""
    return NotificationScheduler(store, fake_platform, clock=lambda: NOW)


@pytest.fixture
def booking(store: AppointmentStore, scheduler: NotificationScheduler) -> BookingService:
    """Booking service over the fake platform."""
    return BookingService(store, scheduler)


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_appointment_data() -> dict:
    """Sample appointment form for testing."""
    return {
        "date": "2024-06-10",
        "start_time": "08:00",
        "end_time": "09:00",
        "client_name": "Laura Gómez",
        "client_phone": "3001234567",
        "service": "Semipermanente",
    }
