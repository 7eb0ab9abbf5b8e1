"""Errors raised by the notification dispatch pipeline."""

from __future__ import annotations

from collections.abc import Iterable


class NotificationError(Exception):
    """Base class for every structural notification failure."""


class RouteNotFound(NotificationError, LookupError):
    """The requested route was never registered."""

    def __init__(self, route: str) -> None:
        super().__init__(f"No notification route registered for '{route}'")
        self.route = route


class RouteAlreadyRegistered(NotificationError, ValueError):
    """A route key was registered twice."""

    def __init__(self, route: str, kind: str) -> None:
        super().__init__(f"A {kind} is already registered for route '{route}'")
        self.route = route
        self.kind = kind


class TemplateNotFound(NotificationError, LookupError):
    """The template configured for a route does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Template '{name}' not found")
        self.name = name


class MissingRequiredParameter(NotificationError, ValueError):
    """The request parameters lack fields required by the route."""

    def __init__(self, route: str, fields: Iterable[str]) -> None:
        self.route = route
        self.fields = tuple(fields)
        joined = ", ".join(self.fields) or "parameters"
        super().__init__(f"Route '{route}' requires: {joined}")


class ValidationFailure(NotificationError, ValueError):
    """A notification violates one or more integrity rules."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = tuple(errors)
        super().__init__("; ".join(self.errors))


class ChannelNotSupported(NotificationError, ValueError):
    """An unrecognized delivery channel was requested."""

    def __init__(self, channel: object) -> None:
        super().__init__(f"Channel '{channel}' is not supported")
        self.channel = channel


class UnknownDeliveryStatus(NotificationError, ValueError):
    """A delivery status filter did not match any known status."""

    def __init__(self, status: object) -> None:
        super().__init__(f"Unknown notification status '{status}'")
        self.status = status


class TemplateRenderError(NotificationError):
    """The template engine failed to render a template.

    The engine exception is always chained as ``__cause__``.
    """


class NotificationNotFound(NotificationError, LookupError):
    """No notification exists with the requested identifier."""

    def __init__(self, notification_id: object) -> None:
        super().__init__(f"Notification '{notification_id}' not found")
        self.notification_id = notification_id


__all__ = [
    "NotificationError",
    "RouteNotFound",
    "RouteAlreadyRegistered",
    "TemplateNotFound",
    "MissingRequiredParameter",
    "ValidationFailure",
    "ChannelNotSupported",
    "UnknownDeliveryStatus",
    "TemplateRenderError",
    "NotificationNotFound",
]
