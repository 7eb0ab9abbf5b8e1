"""Domain entities exposed by the application."""

from .channel import (
    DEFAULT_CHANNELS,
    Channel,
    ChannelDeliveryState,
    DeliveryStatus,
    can_transition,
    default_channel_states,
    parse_channel,
    parse_delivery_status,
)
from .notification import (
    Notification,
    NotificationMetadata,
    NotificationRequest,
    NotificationSummary,
)
from .preference import UserRoutePreference, UserRoutePreferenceView
from .route import NotificationObjectKind, RouteConfig
from .template import NotificationTemplate
from .user import User, UserSummary

__all__ = [
    "DEFAULT_CHANNELS",
    "Channel",
    "ChannelDeliveryState",
    "DeliveryStatus",
    "can_transition",
    "default_channel_states",
    "parse_channel",
    "parse_delivery_status",
    "Notification",
    "NotificationMetadata",
    "NotificationRequest",
    "NotificationSummary",
    "UserRoutePreference",
    "UserRoutePreferenceView",
    "NotificationObjectKind",
    "RouteConfig",
    "NotificationTemplate",
    "User",
    "UserSummary",
]
