"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from notifyhub.domain.entities import (
    Channel,
    DeliveryStatus,
    Notification,
    NotificationRequest,
    NotificationSummary,
    parse_channel,
)


class NotificationCreate(BaseModel):
    """Inbound event asking the service to notify a route's recipients."""

    route: str = Field(..., min_length=1, description="Registered route name, e.g. OrderCreated")
    title: str | None = None
    message: str | None = None
    channels: list[str] | None = Field(
        default=None, description="Channels to deliver on; defaults to Email and Push"
    )
    parameters: dict[str, Any] = Field(default_factory=dict)

    def to_request(self) -> NotificationRequest:
        """Build the domain request; unknown channels raise ``ChannelNotSupported``."""

        channels = (
            [parse_channel(channel) for channel in self.channels] if self.channels else None
        )
        return NotificationRequest(
            route=self.route,
            parameters=dict(self.parameters),
            title=self.title,
            message=self.message,
            channels=channels,
        )


class RecipientRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None
    name: str
    email: str | None = None
    phone_number: str | None = None
    created_at: datetime | None = None


class ChannelStateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    channel: Channel
    status: DeliveryStatus


class MetadataRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    key: str
    value: str


class NotificationSummaryRead(BaseModel):
    """Outcome of dispatching one request."""

    model_config = ConfigDict(from_attributes=True)

    title: str | None
    route: str | None
    created_at: datetime | None
    recipients: list[RecipientRead]
    created_notification_ids: list[UUID]
    status_message: str
    delivery: dict[UUID, dict[Channel, DeliveryStatus]] = Field(default_factory=dict)

    @classmethod
    def from_summary(cls, summary: NotificationSummary) -> "NotificationSummaryRead":
        return cls.model_validate(summary)


class NotificationRead(BaseModel):
    """Representation of a stored notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    route: str
    title: str
    message: str
    created_at: datetime
    read_at: datetime | None = None
    recipient: RecipientRead | None = None
    delivery_channels_state: list[ChannelStateRead] = Field(default_factory=list)
    metadata: list[MetadataRead] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationRead":
        return cls.model_validate(notification)


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[UUID] = Field(..., min_length=1, description="Notification identifiers")


__all__ = [
    "ChannelStateRead",
    "MetadataRead",
    "NotificationCreate",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "NotificationSummaryRead",
    "RecipientRead",
]
