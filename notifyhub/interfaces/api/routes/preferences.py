"""Endpoints exposing the route catalog and per-user route preferences."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from notifyhub.application.use_cases.preferences import (
    get_user_route_preferences,
    list_route_catalog,
    set_user_route_preferences,
)
from notifyhub.interfaces.api.dependencies import NotificationServices, get_services
from notifyhub.interfaces.api.schemas import (
    RouteConfigRead,
    UserRoutePreferenceRead,
    UserRoutePreferencesUpdate,
)

router = APIRouter(tags=["routes"])


@router.get("/routes", response_model=list[RouteConfigRead])
def list_routes(services: NotificationServices = Depends(get_services)) -> list[RouteConfigRead]:
    """Return every route the service can dispatch."""

    return [RouteConfigRead.model_validate(config) for config in list_route_catalog(services.registry)]


@router.get("/users/{user_id}/routes", response_model=list[UserRoutePreferenceRead])
async def read_user_routes(
    user_id: int, services: NotificationServices = Depends(get_services)
) -> list[UserRoutePreferenceRead]:
    views = await get_user_route_preferences(services.registry, services.preferences, user_id)
    return [UserRoutePreferenceRead.model_validate(view) for view in views]


@router.put("/users/{user_id}/routes", response_model=list[UserRoutePreferenceRead])
async def update_user_routes(
    user_id: int,
    payload: UserRoutePreferencesUpdate,
    services: NotificationServices = Depends(get_services),
) -> list[UserRoutePreferenceRead]:
    """Enable or disable routes for ``user_id``; unspecified routes are unchanged."""

    views = await set_user_route_preferences(
        services.registry,
        services.preferences,
        user_id,
        [(item.route, item.enabled) for item in payload.preferences],
    )
    return [UserRoutePreferenceRead.model_validate(view) for view in views]
