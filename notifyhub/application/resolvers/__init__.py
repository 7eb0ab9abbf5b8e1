"""Data resolvers and configurations for every route the service handles."""

from notifyhub.application.registry import RouteRegistry, build_registry
from notifyhub.domain.ports import UserStore

from . import order_created, task_assigned, user_registered
from .base import RouteParameters, UserLookupResolver
from .order_created import OrderCreatedResolver
from .task_assigned import TaskAssignedResolver
from .user_registered import UserRegisteredResolver


def build_route_registry(user_repository: UserStore) -> RouteRegistry:
    """Register every shipped route and return the frozen registry."""

    return build_registry(
        [
            (OrderCreatedResolver(user_repository), order_created.CONFIG),
            (TaskAssignedResolver(user_repository), task_assigned.CONFIG),
            (UserRegisteredResolver(user_repository), user_registered.CONFIG),
        ]
    )


__all__ = [
    "build_route_registry",
    "OrderCreatedResolver",
    "RouteParameters",
    "TaskAssignedResolver",
    "UserLookupResolver",
    "UserRegisteredResolver",
]
