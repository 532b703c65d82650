"""Local notification endpoints."""

from fastapi import APIRouter, status

from agenda.dependencies import Notifications
from agenda.schemas.notifications import DispatchResponse, ScheduledNotificationListResponse

router = APIRouter()


@router.get(
    "/scheduled",
    response_model=ScheduledNotificationListResponse,
    status_code=status.HTTP_200_OK,
    summary="Pending notifications",
)
async def list_scheduled_notifications(
    notifications: Notifications,
) -> ScheduledNotificationListResponse:
    """
    List notifications waiting to fire.

    Returns:
        Pending notifications, soonest first
    """
    items = await notifications.list_pending()
    return ScheduledNotificationListResponse(total=len(items), items=items)


@router.post(
    "/dispatch",
    response_model=DispatchResponse,
    status_code=status.HTTP_200_OK,
    summary="Deliver due notifications",
)
async def dispatch_notifications(notifications: Notifications) -> DispatchResponse:
    """
    Push every notification whose fire time has passed to the studio's devices.

    Meant to be called periodically (cron or the device itself).

    Returns:
        Delivered and failed counts
    """
    return await notifications.dispatch_due()
