from fastapi import APIRouter, Depends, Query, status
import httpx
from leavedash.api.dependencies import get_backend_client
from leavedash.client.notifications import (
    count_unread,
    get_notifications,
    mark_all_notifications_as_read,
    mark_notification_as_read,
)
from leavedash.schemas import MarkAllReadResponse, NotificationListResponse, NotificationPage

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationPage)
async def list_notifications(
    page: int = Query(1, ge=1),
    per_page: int = Query(100, ge=1, le=100),
    unread_only: bool = Query(False),
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    """List notifications, newest first as the backend orders them."""
    response = await get_notifications(client, page=page, per_page=per_page, unread_only=unread_only)
    return NotificationPage(
        notifications=response.notifications,
        pagination=response.pagination,
        unread_count=count_unread(response.notifications)
    )


@router.patch("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(client: httpx.AsyncClient = Depends(get_backend_client)):
    """Mark every notification as read and report how many were unread."""
    unread: NotificationListResponse = await get_notifications(client, page=1, per_page=1, unread_only=True)
    await mark_all_notifications_as_read(client)

    return MarkAllReadResponse(
        marked_count=unread.pagination.total,
        message=f"{unread.pagination.total} notification(s) marked as read"
    )


@router.patch("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(
    notification_id: int,
    client: httpx.AsyncClient = Depends(get_backend_client)
):
    await mark_notification_as_read(client, notification_id)
    return None
