"""ORM models used by the application infrastructure."""

from .notification import NotificationChannelStateModel, NotificationModel
from .preference import UserRoutePreferenceModel
from .user import UserModel

__all__ = [
    "NotificationChannelStateModel",
    "NotificationModel",
    "UserRoutePreferenceModel",
    "UserModel",
]
