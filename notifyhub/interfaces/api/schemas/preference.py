"""Route catalog and preference schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class NotificationObjectKindRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    display_name: str


class RouteConfigRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    template_name: str
    display_name: str
    description: str
    object_kind: NotificationObjectKindRead
    tags: list[str] = Field(default_factory=list)
    icon: str | None = None


class UserRoutePreferenceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    user_id: int
    route: str
    enabled: bool
    display_name: str
    description: str


class RoutePreferenceItem(BaseModel):
    route: str = Field(..., min_length=1)
    enabled: bool


class UserRoutePreferencesUpdate(BaseModel):
    preferences: list[RoutePreferenceItem] = Field(..., min_length=1)


__all__ = [
    "NotificationObjectKindRead",
    "RouteConfigRead",
    "RoutePreferenceItem",
    "UserRoutePreferenceRead",
    "UserRoutePreferencesUpdate",
]
