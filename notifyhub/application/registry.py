"""Build-once registry mapping route names to resolvers and configurations."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from notifyhub.domain.entities import RouteConfig
from notifyhub.domain.errors import RouteAlreadyRegistered, RouteNotFound
from notifyhub.domain.ports import NotificationDataResolver

logger = logging.getLogger(__name__)


class RouteRegistry:
    """Map each route to exactly one data resolver and one route configuration.

    Routes are registered explicitly at startup. :meth:`freeze` makes the
    registry read-only; after that lookups need no synchronization.
    """

    def __init__(self) -> None:
        self._resolvers: dict[str, NotificationDataResolver] = {}
        self._configs: dict[str, RouteConfig] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register_resolver(self, route: str, resolver: NotificationDataResolver) -> "RouteRegistry":
        self._ensure_writable()
        if resolver.route != route:
            msg = f"Resolver for '{resolver.route}' cannot be registered under '{route}'"
            raise ValueError(msg)
        if route in self._resolvers:
            raise RouteAlreadyRegistered(route, "resolver")
        self._resolvers[route] = resolver
        return self

    def register_config(self, route: str, config: RouteConfig) -> "RouteRegistry":
        self._ensure_writable()
        if config.name != route:
            msg = f"Route config '{config.name}' cannot be registered under '{route}'"
            raise ValueError(msg)
        if route in self._configs:
            raise RouteAlreadyRegistered(route, "route config")
        self._configs[route] = config
        return self

    def register(self, resolver: NotificationDataResolver, config: RouteConfig) -> "RouteRegistry":
        """Register a resolver and its configuration under ``config.name``."""

        self.register_resolver(config.name, resolver)
        return self.register_config(config.name, config)

    def freeze(self) -> "RouteRegistry":
        missing = sorted(set(self._resolvers) ^ set(self._configs))
        if missing:
            msg = f"Routes registered without a resolver/config pair: {', '.join(missing)}"
            raise ValueError(msg)
        self._frozen = True
        logger.info("Route registry frozen with routes: %s", ", ".join(self.routes()))
        return self

    def resolver_for(self, route: str) -> NotificationDataResolver:
        try:
            return self._resolvers[route]
        except KeyError:
            raise RouteNotFound(route) from None

    def config_for(self, route: str) -> RouteConfig:
        try:
            return self._configs[route]
        except KeyError:
            raise RouteNotFound(route) from None

    def routes(self) -> list[str]:
        return sorted(self._configs)

    def configs(self) -> list[RouteConfig]:
        return [self._configs[route] for route in self.routes()]

    def __contains__(self, route: object) -> bool:
        return route in self._configs

    def _ensure_writable(self) -> None:
        if self._frozen:
            raise RuntimeError("Route registry is frozen; register routes at startup")


def build_registry(
    entries: Iterable[tuple[NotificationDataResolver, RouteConfig]],
) -> RouteRegistry:
    """Register every ``(resolver, config)`` pair and freeze the registry."""

    registry = RouteRegistry()
    for resolver, config in entries:
        registry.register(resolver, config)
    return registry.freeze()


__all__ = ["RouteRegistry", "build_registry"]
