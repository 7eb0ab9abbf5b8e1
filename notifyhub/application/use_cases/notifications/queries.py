"""Read-side use cases for stored notifications."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from uuid import UUID

from notifyhub.domain.entities import Notification, parse_delivery_status
from notifyhub.domain.errors import NotificationNotFound
from notifyhub.domain.ports import NotificationStore

MAX_PAGE_SIZE = 200


async def get_notification(store: NotificationStore, notification_id: UUID) -> Notification:
    """Return the notification identified by ``notification_id`` or raise."""

    notification = await store.get(notification_id)
    if notification is None:
        raise NotificationNotFound(notification_id)
    return notification


async def list_user_notifications(
    store: NotificationStore,
    user_id: int,
    *,
    only_unread: bool = False,
    page: int = 1,
    page_size: int = 50,
) -> Sequence[Notification]:
    """Return one page of the user's notifications, newest first."""

    page = max(page, 1)
    page_size = min(max(page_size, 1), MAX_PAGE_SIZE)
    return await store.list_for_user(
        user_id,
        only_unread=only_unread,
        limit=page_size,
        offset=(page - 1) * page_size,
    )


async def list_notifications_by_status(
    store: NotificationStore, status: str, *, limit: int | None = 100
) -> Sequence[Notification]:
    """Return notifications having at least one channel in ``status``."""

    return await store.list_by_status(parse_delivery_status(status), limit=limit)


async def mark_notifications_as_read(
    store: NotificationStore, user_id: int, notification_ids: Iterable[UUID]
) -> int:
    """Mark the user's notifications as read and return how many changed."""

    unique_ids = list(dict.fromkeys(notification_ids))
    if not unique_ids:
        return 0
    return await store.mark_as_read(unique_ids, user_id=user_id)


__all__ = [
    "MAX_PAGE_SIZE",
    "get_notification",
    "list_notifications_by_status",
    "list_user_notifications",
    "mark_notifications_as_read",
]
