from typing import Iterable

import httpx

from leavedash.client.base import request_json
from leavedash.schemas import Notification, NotificationListResponse


def count_unread(notifications: Iterable[Notification]) -> int:
    return sum(1 for notification in notifications if not notification.is_read)


async def get_notifications(
    client: httpx.AsyncClient,
    page: int = 1,
    per_page: int = 100,
    unread_only: bool = False
) -> NotificationListResponse:
    data = await request_json(
        client, "GET", "/notifications",
        action="fetch notifications",
        params={"page": page, "per_page": per_page, "unread_only": unread_only}
    )
    return NotificationListResponse.model_validate(data)


async def mark_notification_as_read(client: httpx.AsyncClient, notification_id: int) -> None:
    await request_json(
        client, "PATCH", f"/notifications/{notification_id}/read",
        action=f"mark notification {notification_id} as read"
    )


async def mark_all_notifications_as_read(client: httpx.AsyncClient) -> None:
    await request_json(
        client, "PATCH", "/notifications/read-all",
        action="mark all notifications as read"
    )
