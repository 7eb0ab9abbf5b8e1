"""Collaborator contracts consumed by the dispatch pipeline."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from .entities import (
    DeliveryStatus,
    Notification,
    NotificationRequest,
    NotificationTemplate,
    User,
    UserRoutePreference,
)


@runtime_checkable
class NotificationDataResolver(Protocol):
    """Route-specific source of recipients and template data."""

    route: str

    async def resolve_recipients(self, request: NotificationRequest) -> Sequence[User]:
        """Return the users that must receive a notification for ``request``."""
        ...

    async def resolve_full_data(self, request: NotificationRequest) -> Any:
        """Return the data object handed verbatim to the template renderer."""
        ...


class TemplateRenderer(Protocol):
    def render(self, template_text: str | None, data: Any, *, html: bool = True) -> str:
        ...


class NotificationStore(Protocol):
    async def save_batch(self, notifications: Sequence[Notification]) -> None:
        ...

    async def update_batch(self, notifications: Sequence[Notification]) -> None:
        ...

    async def get(self, notification_id: UUID) -> Notification | None:
        ...

    async def list_for_user(
        self,
        user_id: int,
        *,
        only_unread: bool = False,
        limit: int | None = 50,
        offset: int = 0,
    ) -> Sequence[Notification]:
        ...

    async def list_by_status(
        self, status: DeliveryStatus, *, limit: int | None = 100
    ) -> Sequence[Notification]:
        ...

    async def mark_as_read(self, notification_ids: Iterable[UUID], *, user_id: int) -> int:
        ...

    async def delete_older_than(self, cutoff: datetime) -> int:
        ...


class TemplateStore(Protocol):
    async def get_by_name(self, name: str) -> NotificationTemplate | None:
        ...


class UserStore(Protocol):
    async def get(self, user_id: int) -> User | None:
        ...


class PreferenceStore(Protocol):
    async def is_route_enabled(self, user_id: int, route: str) -> bool:
        ...

    async def list_for_user(self, user_id: int) -> Sequence[UserRoutePreference]:
        ...

    async def set_preferences(
        self, user_id: int, preferences: Iterable[tuple[str, bool]]
    ) -> None:
        ...


class EmailProvider(Protocol):
    async def send_email(self, to: str, subject: str, body: str) -> bool:
        ...


class SmsProvider(Protocol):
    async def send_sms(self, to: str, body: str) -> bool:
        ...


class PushProvider(Protocol):
    async def send_push(self, device_token: str, title: str, body: str) -> bool:
        ...


__all__ = [
    "NotificationDataResolver",
    "TemplateRenderer",
    "NotificationStore",
    "TemplateStore",
    "UserStore",
    "PreferenceStore",
    "EmailProvider",
    "SmsProvider",
    "PushProvider",
]
