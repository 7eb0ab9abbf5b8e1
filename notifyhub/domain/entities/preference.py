"""Per-user, per-route opt-out preferences."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class UserRoutePreference:
    """Whether ``user_id`` wants notifications for ``route``.

    A missing row means the route is enabled.
    """

    user_id: int
    route: str
    enabled: bool = True
    id: int | None = None


@dataclass(frozen=True)
class UserRoutePreferenceView:
    """Preference merged with the route's presentation data."""

    user_id: int
    route: str
    enabled: bool
    display_name: str
    description: str
    id: int | None = None


__all__ = ["UserRoutePreference", "UserRoutePreferenceView"]
