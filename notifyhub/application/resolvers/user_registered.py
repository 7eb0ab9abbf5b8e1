"""``UserRegistered``: welcome a freshly registered user."""

from __future__ import annotations

from typing import Any

from notifyhub.domain.entities import NotificationRequest, RouteConfig, User
from notifyhub.utils import now_in_app_timezone

from .base import RouteParameters, UserLookupResolver
from .kinds import USER

ROUTE = "UserRegistered"
DEFAULT_WELCOME_MESSAGE = "Welcome to our service!"


class UserRegisteredParameters(RouteParameters):
    user_id: int
    welcome_message: str | None = None


class UserRegisteredResolver(UserLookupResolver):
    route = ROUTE
    parameters_model = UserRegisteredParameters

    async def resolve_recipients(self, request: NotificationRequest) -> list[User]:
        params = self.parameters(request)
        return await self._single_recipient(params.user_id)

    async def resolve_full_data(self, request: NotificationRequest) -> dict[str, Any]:
        params = self.parameters(request)
        user = await self._require_user(params.user_id, "userId")
        return {
            "UserName": user.name,
            "UserEmail": user.email or "",
            "RegistrationDate": now_in_app_timezone(),
            "WelcomeMessage": params.welcome_message or DEFAULT_WELCOME_MESSAGE,
        }


CONFIG = RouteConfig(
    name=ROUTE,
    template_name="UserRegistered",
    display_name="User Registration",
    description="Notification sent when a new user registers",
    object_kind=USER,
    tags=("user", "registration", "welcome"),
    icon="user",
)

__all__ = ["CONFIG", "ROUTE", "UserRegisteredParameters", "UserRegisteredResolver"]
