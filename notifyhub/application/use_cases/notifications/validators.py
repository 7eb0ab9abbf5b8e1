"""Integrity checks applied to a notification before it is sent."""

from __future__ import annotations

from notifyhub.domain.entities import Notification
from notifyhub.domain.errors import ValidationFailure


def collect_notification_errors(notification: Notification) -> list[str]:
    """Return every violated rule for ``notification`` (empty when valid)."""

    errors: list[str] = []
    if not (notification.title or "").strip():
        errors.append("Title is required.")
    if notification.recipient is None:
        errors.append("Recipient is required.")
    if notification.template is None and not (notification.message or "").strip():
        errors.append("Either message text or template must be provided.")
    return errors


def validate_notification(notification: Notification) -> None:
    """Raise :class:`ValidationFailure` listing all violated rules."""

    errors = collect_notification_errors(notification)
    if errors:
        raise ValidationFailure(errors)


__all__ = ["collect_notification_errors", "validate_notification"]
