"""In-memory collaborators used in place of the database and providers."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from uuid import UUID

from notifyhub.domain.entities import (
    DeliveryStatus,
    Notification,
    User,
    UserRoutePreference,
)


class FakeNotificationStore:
    """Records persistence calls and keeps notifications in a dict."""

    def __init__(self) -> None:
        self.saved: list[list[Notification]] = []
        self.updated: list[list[Notification]] = []
        self.items: dict[UUID, Notification] = {}
        self.deleted_before: list[datetime] = []

    @property
    def calls(self) -> int:
        return len(self.saved) + len(self.updated)

    async def save_batch(self, notifications: Sequence[Notification]) -> None:
        self.saved.append(list(notifications))
        for notification in notifications:
            self.items[notification.id] = notification

    async def update_batch(self, notifications: Sequence[Notification]) -> None:
        self.updated.append(list(notifications))
        for notification in notifications:
            self.items[notification.id] = notification

    async def get(self, notification_id: UUID) -> Notification | None:
        return self.items.get(notification_id)

    async def list_for_user(self, user_id, *, only_unread=False, limit=50, offset=0):
        found = [n for n in self.items.values() if n.recipient_id == user_id]
        if only_unread:
            found = [n for n in found if n.read_at is None]
        found.sort(key=lambda n: n.created_at, reverse=True)
        end = None if limit is None else offset + limit
        return found[offset:end]

    async def list_by_status(self, status: DeliveryStatus, *, limit=100):
        found = [n for n in self.items.values() if status in n.statuses().values()]
        return found[:limit]

    async def mark_as_read(self, notification_ids: Iterable[UUID], *, user_id: int) -> int:
        count = 0
        for notification_id in notification_ids:
            notification = self.items.get(notification_id)
            if notification is not None and notification.recipient_id == user_id:
                count += 1
        return count

    async def delete_older_than(self, cutoff: datetime) -> int:
        self.deleted_before.append(cutoff)
        old = [key for key, n in self.items.items() if n.created_at < cutoff]
        for key in old:
            del self.items[key]
        return len(old)


class FakeUserStore:
    def __init__(self, users: Iterable[User] = ()) -> None:
        self.users = {user.id: user for user in users}

    async def get(self, user_id: int) -> User | None:
        return self.users.get(user_id)


class FakePreferenceStore:
    def __init__(self, disabled: Iterable[tuple[int, str]] = ()) -> None:
        self.rows: dict[tuple[int, str], bool] = {key: False for key in disabled}

    async def is_route_enabled(self, user_id: int, route: str) -> bool:
        return self.rows.get((user_id, route), True)

    async def list_for_user(self, user_id: int) -> list[UserRoutePreference]:
        return [
            UserRoutePreference(user_id=uid, route=route, enabled=enabled)
            for (uid, route), enabled in sorted(self.rows.items())
            if uid == user_id
        ]

    async def set_preferences(self, user_id: int, preferences) -> None:
        for route, enabled in preferences:
            self.rows[(user_id, route)] = enabled


class RecordingEmailProvider:
    def __init__(self, result: bool = True, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.sent: list[tuple[str, str, str]] = []

    async def send_email(self, to: str, subject: str, body: str) -> bool:
        if self.error is not None:
            raise self.error
        self.sent.append((to, subject, body))
        return self.result


class RecordingSmsProvider:
    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.sent: list[tuple[str, str]] = []

    async def send_sms(self, to: str, body: str) -> bool:
        self.sent.append((to, body))
        return self.result


class RecordingPushProvider:
    def __init__(self, result: bool = True, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.sent: list[tuple[str, str, str]] = []

    async def send_push(self, device_token: str, title: str, body: str) -> bool:
        if self.error is not None:
            raise self.error
        self.sent.append((device_token, title, body))
        return self.result
