"""Health check endpoints."""

import structlog
from fastapi import APIRouter, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from agenda.config import settings
from agenda.core.firebase import is_firebase_initialized
from agenda.database import check_database_connection
from agenda.dependencies import Notifications

logger = structlog.get_logger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str


class DetailedHealthResponse(BaseModel):
    """Detailed health check response model."""

    status: str
    version: str
    environment: str
    database: str
    push_notifications: str
    reminders: str
    pending_reminders: int | None = None


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Basic health check",
)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns:
        Basic health status
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Detailed health check",
)
async def detailed_health_check(notifications: Notifications) -> DetailedHealthResponse:
    """
    Detailed health check with database, reminder table and push delivery status.

    Push delivery or the reminder table being unavailable only degrades
    reminders, so neither makes the service unhealthy.
    """
    db_healthy = await check_database_connection()

    pending_reminders: int | None
    try:
        pending_reminders = await notifications.count_pending()
    except SQLAlchemyError as e:
        logger.warning("reminder_table_unavailable", error=str(e))
        pending_reminders = None

    return DetailedHealthResponse(
        status="healthy" if db_healthy else "unhealthy",
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if db_healthy else "unhealthy",
        push_notifications="enabled" if is_firebase_initialized() else "disabled",
        reminders="healthy" if pending_reminders is not None else "unavailable",
        pending_reminders=pending_reminders,
    )


@router.get(
    "/ping",
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Simple ping",
)
async def ping() -> dict[str, str]:
    """
    Simple ping endpoint.

    Returns:
        Pong response
    """
    return {"message": "pong"}
