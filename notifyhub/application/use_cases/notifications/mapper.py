"""Turn a routed request into per-recipient notifications and back into a summary."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from notifyhub.domain.entities import (
    DEFAULT_CHANNELS,
    Notification,
    NotificationMetadata,
    NotificationRequest,
    NotificationSummary,
    NotificationTemplate,
    User,
    UserSummary,
    default_channel_states,
)
from notifyhub.domain.ports import NotificationDataResolver, TemplateRenderer
from notifyhub.utils import utc_now

logger = logging.getLogger(__name__)

NO_SUBJECT = "No subject"


def unique_recipients(users: Sequence[User]) -> list[User]:
    """Drop repeated users (same id) while keeping the first occurrence order."""

    unique: list[User] = []
    seen: set[object] = set()
    for user in users:
        if user is None:
            continue
        key = user.id if user.id is not None else id(user)
        if key in seen:
            continue
        seen.add(key)
        unique.append(user)
    return unique


class NotificationMapper:
    """Materialize notifications from requests and summarize dispatched batches."""

    def __init__(self, renderer: TemplateRenderer) -> None:
        self._renderer = renderer

    async def build_notifications(
        self,
        request: NotificationRequest,
        resolver: NotificationDataResolver,
        template: NotificationTemplate,
    ) -> list[Notification]:
        """Return one pending notification per resolved recipient.

        Template data is resolved and rendered once and shared by every
        recipient; each notification gets its own id and channel states.
        """

        data = await resolver.resolve_full_data(request)

        title = self._render_subject(request, template, data)
        message = self._renderer.render(template.content_template_for(), data)
        if not message and request.message:
            message = request.message

        channels = list(request.channels) if request.channels else list(DEFAULT_CHANNELS)
        created_at = utc_now()

        recipients = unique_recipients(await resolver.resolve_recipients(request))
        logger.debug(
            "Route %s resolved %d recipient(s) for channels %s",
            request.route,
            len(recipients),
            [channel.value for channel in channels],
        )

        return [
            Notification(
                id=uuid.uuid4(),
                title=title,
                message=message,
                route=request.route,
                created_at=created_at,
                recipient=recipient,
                template=template,
                delivery_channels_state=default_channel_states(channels),
                metadata=[NotificationMetadata(key="template", value=template.name)],
                template_data=data,
            )
            for recipient in recipients
        ]

    def _render_subject(
        self, request: NotificationRequest, template: NotificationTemplate, data: object
    ) -> str:
        subject = ""
        if template.subject and template.subject.strip():
            subject = self._renderer.render(template.subject, data, html=False)
        if subject.strip():
            return subject
        if request.title and request.title.strip():
            return request.title
        return NO_SUBJECT

    @staticmethod
    def summarize(
        notifications: Sequence[Notification],
        *,
        route: str | None = None,
        title: str | None = None,
    ) -> NotificationSummary:
        """Describe a batch produced by :meth:`build_notifications`.

        Every notification of a batch shares title, route and creation time,
        so those are taken from the first one. ``route``/``title`` are used
        when the batch is empty.
        """

        if not notifications:
            label = f" for route '{route}'" if route else ""
            return NotificationSummary(
                title=title,
                route=route,
                created_at=None,
                recipients=[],
                created_notification_ids=[],
                status_message=f"No recipients resolved{label}; nothing was dispatched.",
            )

        first = notifications[0]
        recipients = [
            UserSummary.from_user(n.recipient) for n in notifications if n.recipient is not None
        ]
        count = len(notifications)
        noun = "recipient" if count == 1 else "recipients"
        return NotificationSummary(
            title=first.title,
            route=first.route,
            created_at=first.created_at,
            recipients=recipients,
            created_notification_ids=[n.id for n in notifications],
            status_message=f"Notification dispatched to {count} {noun}.",
            delivery={n.id: n.statuses() for n in notifications},
        )


__all__ = ["NotificationMapper", "NO_SUBJECT", "unique_recipients"]
