"""Domain entities describing notifications and their delivery state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from .channel import Channel, ChannelDeliveryState, DeliveryStatus
from .template import NotificationTemplate
from .user import User, UserSummary


@dataclass(frozen=True)
class NotificationMetadata:
    """Free-form key/value pair attached to a notification."""

    key: str
    value: str


@dataclass
class Notification:
    """One message for one recipient, tracked per delivery channel."""

    id: UUID
    title: str
    message: str
    route: str
    created_at: datetime
    recipient: User | None = None
    template: NotificationTemplate | None = None
    delivery_channels_state: list[ChannelDeliveryState] = field(default_factory=list)
    metadata: list[NotificationMetadata] = field(default_factory=list)
    read_at: datetime | None = None
    # Rendering context kept in memory so channel overrides can be rendered at
    # send time; it is never persisted.
    template_data: Any = field(default=None, repr=False, compare=False)

    @property
    def recipient_id(self) -> int | None:
        return self.recipient.id if self.recipient is not None else None

    @property
    def channels(self) -> list[Channel]:
        return [state.channel for state in self.delivery_channels_state]

    def status_for(self, channel: Channel) -> DeliveryStatus | None:
        for state in self.delivery_channels_state:
            if state.channel is channel:
                return state.status
        return None

    def statuses(self) -> dict[Channel, DeliveryStatus]:
        return {state.channel: state.status for state in self.delivery_channels_state}


@dataclass
class NotificationRequest:
    """Inbound "something happened" event for a route."""

    route: str
    parameters: dict[str, Any] = field(default_factory=dict)
    title: str | None = None
    message: str | None = None
    channels: list[Channel] | None = None


@dataclass(frozen=True)
class NotificationSummary:
    """API-facing description of a dispatched batch of notifications."""

    title: str | None
    route: str | None
    created_at: datetime | None
    recipients: list[UserSummary]
    created_notification_ids: list[UUID]
    status_message: str
    delivery: dict[UUID, dict[Channel, DeliveryStatus]] = field(default_factory=dict)


__all__ = [
    "Notification",
    "NotificationMetadata",
    "NotificationRequest",
    "NotificationSummary",
]
