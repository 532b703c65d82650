"""Deliver due reminders once; run from cron every few minutes."""

import asyncio
import sys

import structlog

from agenda.config import settings
from agenda.core.firebase import initialize_firebase
from agenda.database import AsyncSessionLocal, engine
from agenda.middleware.logging import configure_logging
from agenda.services.notification_service import NotificationService

logger = structlog.get_logger()


async def dispatch() -> int:
    """Push every notification whose fire time has passed."""
    initialize_firebase(settings.firebase_credentials_path, settings.firebase_config_json)

    async with AsyncSessionLocal() as session:
        service = NotificationService(session, settings.device_tokens)
        result = await service.dispatch_due()

    await engine.dispose()
    logger.info("reminders_dispatched", delivered=result.delivered, failed=result.failed)
    return 1 if result.failed else 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(asyncio.run(dispatch()))
