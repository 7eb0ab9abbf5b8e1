"""Business object kinds reported by the shipped routes."""

from notifyhub.domain.entities import NotificationObjectKind

ORDER = NotificationObjectKind(name="Order", display_name="Order")
TASK = NotificationObjectKind(name="Task", display_name="Task")
USER = NotificationObjectKind(name="User", display_name="User")

__all__ = ["ORDER", "TASK", "USER"]
