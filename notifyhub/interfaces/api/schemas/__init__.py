"""Pydantic schemas used by the HTTP API."""

from .notification import (
    ChannelStateRead,
    MetadataRead,
    NotificationCreate,
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationSummaryRead,
    RecipientRead,
)
from .preference import (
    NotificationObjectKindRead,
    RouteConfigRead,
    RoutePreferenceItem,
    UserRoutePreferenceRead,
    UserRoutePreferencesUpdate,
)

__all__ = [
    "ChannelStateRead",
    "MetadataRead",
    "NotificationCreate",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "NotificationSummaryRead",
    "RecipientRead",
    "NotificationObjectKindRead",
    "RouteConfigRead",
    "RoutePreferenceItem",
    "UserRoutePreferenceRead",
    "UserRoutePreferencesUpdate",
]
