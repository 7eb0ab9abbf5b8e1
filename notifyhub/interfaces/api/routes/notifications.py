"""Endpoints for dispatching and querying notifications."""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from notifyhub.application.use_cases.notifications import (
    get_notification,
    list_notifications_by_status,
    list_user_notifications,
    mark_notifications_as_read,
)
from notifyhub.application.use_cases.notifications.queries import MAX_PAGE_SIZE
from notifyhub.interfaces.api.dependencies import NotificationServices, get_services
from notifyhub.interfaces.api.schemas import (
    NotificationCreate,
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationSummaryRead,
)

router = APIRouter(tags=["notifications"])
logger = logging.getLogger(__name__)


@router.post(
    "/notifications/",
    response_model=NotificationSummaryRead,
    status_code=status.HTTP_201_CREATED,
)
async def send_notification(
    payload: NotificationCreate,
    services: NotificationServices = Depends(get_services),
) -> NotificationSummaryRead:
    """Dispatch a route event to every recipient it resolves to."""

    summary = await services.dispatcher.process(payload.to_request())
    logger.info("Route %s: %s", payload.route, summary.status_message)
    return NotificationSummaryRead.from_summary(summary)


@router.get("/notifications/by-user/{user_id}", response_model=list[NotificationRead])
async def read_user_notifications(
    user_id: int,
    only_unread: bool = False,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=MAX_PAGE_SIZE),
    services: NotificationServices = Depends(get_services),
) -> list[NotificationRead]:
    notifications = await list_user_notifications(
        services.notifications,
        user_id,
        only_unread=only_unread,
        page=page,
        page_size=page_size,
    )
    return [NotificationRead.from_entity(notification) for notification in notifications]


@router.get("/notifications/by-status/{status_name}", response_model=list[NotificationRead])
async def read_notifications_by_status(
    status_name: str,
    limit: int = Query(100, ge=1, le=1000),
    services: NotificationServices = Depends(get_services),
) -> list[NotificationRead]:
    """Return notifications with at least one channel in the given status."""

    notifications = await list_notifications_by_status(
        services.notifications, status_name, limit=limit
    )
    return [NotificationRead.from_entity(notification) for notification in notifications]


@router.get("/notifications/{notification_id}", response_model=NotificationRead)
async def read_notification(
    notification_id: UUID,
    services: NotificationServices = Depends(get_services),
) -> NotificationRead:
    notification = await get_notification(services.notifications, notification_id)
    return NotificationRead.from_entity(notification)


@router.post(
    "/users/{user_id}/notifications/read",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def mark_user_notifications_as_read(
    user_id: int,
    payload: NotificationMarkReadRequest,
    services: NotificationServices = Depends(get_services),
) -> Response:
    """Mark the given notifications of ``user_id`` as read."""

    updated = await mark_notifications_as_read(services.notifications, user_id, payload.ids)
    logger.debug("Marked %d notification(s) of user %s as read", updated, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
