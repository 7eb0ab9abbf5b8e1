"""Delivery channels and per-channel delivery statuses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from notifyhub.domain.errors import ChannelNotSupported, UnknownDeliveryStatus


class Channel(str, Enum):
    """Medium through which a notification reaches its recipient."""

    EMAIL = "Email"
    SMS = "Sms"
    PUSH = "Push"
    IN_APP = "InApp"


class DeliveryStatus(str, Enum):
    """Outcome of delivering one notification over one channel."""

    PENDING = "Pending"
    SKIPPED = "Skipped"
    SENT = "Sent"
    FAILED = "Failed"
    READ = "Read"


DEFAULT_CHANNELS: tuple[Channel, ...] = (Channel.EMAIL, Channel.PUSH)

_ALLOWED_TRANSITIONS: dict[DeliveryStatus, frozenset[DeliveryStatus]] = {
    DeliveryStatus.PENDING: frozenset(
        {DeliveryStatus.SKIPPED, DeliveryStatus.SENT, DeliveryStatus.FAILED}
    ),
    DeliveryStatus.SENT: frozenset({DeliveryStatus.READ}),
}


def _lookup(enum_cls, value: object):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        normalized = value.strip().replace("_", "").replace("-", "").lower()
        for member in enum_cls:
            if member.value.lower() == normalized:
                return member
    return None


def parse_channel(value: object) -> Channel:
    """Return the :class:`Channel` named by ``value`` (case-insensitive)."""

    channel = _lookup(Channel, value)
    if channel is None:
        raise ChannelNotSupported(value)
    return channel


def parse_delivery_status(value: object) -> DeliveryStatus:
    """Return the :class:`DeliveryStatus` named by ``value`` (case-insensitive)."""

    status = _lookup(DeliveryStatus, value)
    if status is None:
        raise UnknownDeliveryStatus(value)
    return status


def can_transition(current: DeliveryStatus, target: DeliveryStatus) -> bool:
    """Return ``True`` when ``current -> target`` is a valid delivery transition."""

    return target in _ALLOWED_TRANSITIONS.get(current, frozenset())


@dataclass(frozen=True)
class ChannelDeliveryState:
    """Delivery status of a notification on a single channel."""

    channel: Channel
    status: DeliveryStatus = DeliveryStatus.PENDING

    @property
    def is_pending(self) -> bool:
        return self.status is DeliveryStatus.PENDING

    def transition(self, target: DeliveryStatus) -> "ChannelDeliveryState":
        """Return a copy moved to ``target``; invalid moves raise ``ValueError``."""

        if not can_transition(self.status, target):
            msg = (
                f"Invalid delivery transition for {self.channel.value}: "
                f"{self.status.value} -> {target.value}"
            )
            raise ValueError(msg)
        return ChannelDeliveryState(channel=self.channel, status=target)


def default_channel_states(
    channels: "tuple[Channel, ...] | list[Channel]",
) -> list[ChannelDeliveryState]:
    """Seed one ``Pending`` state per distinct channel, preserving order."""

    seen: set[Channel] = set()
    states: list[ChannelDeliveryState] = []
    for channel in channels:
        if channel in seen:
            continue
        seen.add(channel)
        states.append(ChannelDeliveryState(channel=channel))
    return states


__all__ = [
    "Channel",
    "DeliveryStatus",
    "DEFAULT_CHANNELS",
    "ChannelDeliveryState",
    "can_transition",
    "default_channel_states",
    "parse_channel",
    "parse_delivery_status",
]
