"""Static description of a notification route."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NotificationObjectKind:
    """Kind of business object a route reports about (order, task, ...)."""

    name: str
    display_name: str


@dataclass(frozen=True)
class RouteConfig:
    """Per-route settings: which template to use and how to present the route."""

    name: str
    template_name: str
    display_name: str
    description: str
    object_kind: NotificationObjectKind
    tags: tuple[str, ...] = field(default_factory=tuple)
    icon: str | None = None


__all__ = ["NotificationObjectKind", "RouteConfig"]
