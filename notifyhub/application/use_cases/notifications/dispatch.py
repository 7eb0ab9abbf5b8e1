"""End-to-end use case: routed request in, dispatched notifications out."""

from __future__ import annotations

import asyncio
import logging

from notifyhub.application.registry import RouteRegistry
from notifyhub.domain.entities import NotificationRequest, NotificationSummary
from notifyhub.domain.errors import TemplateNotFound
from notifyhub.domain.ports import NotificationStore, TemplateStore

from .mapper import NotificationMapper
from .sender import NotificationSender

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Resolve, render, persist and send the notifications for one request."""

    def __init__(
        self,
        registry: RouteRegistry,
        template_store: TemplateStore,
        notification_store: NotificationStore,
        mapper: NotificationMapper,
        sender: NotificationSender,
    ) -> None:
        self._registry = registry
        self._templates = template_store
        self._store = notification_store
        self._mapper = mapper
        self._sender = sender

    async def process(self, request: NotificationRequest) -> NotificationSummary:
        """Dispatch ``request`` and return a summary of the created notifications.

        Route, template and parameter errors are raised before anything is
        persisted. Sends run concurrently and each one settles on its own; if
        any of them raised, the first error is re-raised after all finished.
        """

        resolver = self._registry.resolver_for(request.route)
        config = self._registry.config_for(request.route)

        template = await self._templates.get_by_name(config.template_name)
        if template is None:
            raise TemplateNotFound(config.template_name)

        notifications = await self._mapper.build_notifications(request, resolver, template)
        logger.info(
            "Dispatching route %s to %d recipient(s)", request.route, len(notifications)
        )

        if notifications:
            await self._store.save_batch(notifications)
            results = await asyncio.gather(
                *(self._sender.send(notification) for notification in notifications),
                return_exceptions=True,
            )
            failures = [
                (notification, result)
                for notification, result in zip(notifications, results)
                if isinstance(result, BaseException)
            ]
            for notification, error in failures:
                logger.error(
                    "Sending notification %s for route %s failed: %s",
                    notification.id,
                    request.route,
                    error,
                    exc_info=error,
                )
            if failures:
                raise failures[0][1]

        return self._mapper.summarize(
            notifications, route=request.route, title=request.title
        )


__all__ = ["NotificationDispatcher"]
