"""Read and change which routes a user receives notifications for."""

from __future__ import annotations

from collections.abc import Iterable

from notifyhub.application.registry import RouteRegistry
from notifyhub.domain.entities import RouteConfig, UserRoutePreferenceView
from notifyhub.domain.errors import RouteNotFound
from notifyhub.domain.ports import PreferenceStore


def list_route_catalog(registry: RouteRegistry) -> list[RouteConfig]:
    """Return every registered route configuration ordered by route name."""

    return registry.configs()


async def get_user_route_preferences(
    registry: RouteRegistry, store: PreferenceStore, user_id: int
) -> list[UserRoutePreferenceView]:
    """Return one entry per registered route; routes without a row are enabled."""

    stored = {pref.route: pref for pref in await store.list_for_user(user_id)}
    views: list[UserRoutePreferenceView] = []
    for config in registry.configs():
        pref = stored.get(config.name)
        views.append(
            UserRoutePreferenceView(
                user_id=user_id,
                route=config.name,
                enabled=pref.enabled if pref is not None else True,
                display_name=config.display_name,
                description=config.description,
                id=pref.id if pref is not None else None,
            )
        )
    return views


async def set_user_route_preferences(
    registry: RouteRegistry,
    store: PreferenceStore,
    user_id: int,
    preferences: Iterable[tuple[str, bool]],
) -> list[UserRoutePreferenceView]:
    """Store the given ``(route, enabled)`` pairs and return the merged view."""

    pairs = list(preferences)
    for route, _enabled in pairs:
        if route not in registry:
            raise RouteNotFound(route)
    await store.set_preferences(user_id, pairs)
    return await get_user_route_preferences(registry, store, user_id)


__all__ = [
    "get_user_route_preferences",
    "list_route_catalog",
    "set_user_route_preferences",
]
