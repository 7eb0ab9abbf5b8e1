"""Repository implementations backed by SQLAlchemy."""

from .notification_repository import NotificationRepository
from .preference_repository import UserRoutePreferenceRepository
from .user_repository import UserRepository

__all__ = [
    "NotificationRepository",
    "UserRoutePreferenceRepository",
    "UserRepository",
]
