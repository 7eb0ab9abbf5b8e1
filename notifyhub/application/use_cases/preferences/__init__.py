"""Per-user route preference use cases."""

from .route_preferences import (
    get_user_route_preferences,
    list_route_catalog,
    set_user_route_preferences,
)

__all__ = [
    "get_user_route_preferences",
    "list_route_catalog",
    "set_user_route_preferences",
]
