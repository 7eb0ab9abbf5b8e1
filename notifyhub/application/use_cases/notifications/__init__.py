"""Notification dispatch and query use cases."""

from .cleanup import cleanup_old_notifications
from .dispatch import NotificationDispatcher
from .mapper import NO_SUBJECT, NotificationMapper, unique_recipients
from .queries import (
    get_notification,
    list_notifications_by_status,
    list_user_notifications,
    mark_notifications_as_read,
)
from .sender import ChannelOutcome, NotificationSender
from .validators import collect_notification_errors, validate_notification

__all__ = [
    "cleanup_old_notifications",
    "NotificationDispatcher",
    "NO_SUBJECT",
    "NotificationMapper",
    "unique_recipients",
    "get_notification",
    "list_notifications_by_status",
    "list_user_notifications",
    "mark_notifications_as_read",
    "ChannelOutcome",
    "NotificationSender",
    "collect_notification_errors",
    "validate_notification",
]
