"""Deliver a notification over every requested channel."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from notifyhub.domain.entities import (
    Channel,
    ChannelDeliveryState,
    DeliveryStatus,
    Notification,
)
from notifyhub.domain.errors import ChannelNotSupported
from notifyhub.domain.ports import (
    EmailProvider,
    NotificationStore,
    PreferenceStore,
    PushProvider,
    SmsProvider,
    TemplateRenderer,
)

from .validators import validate_notification

logger = logging.getLogger(__name__)

ChannelHandler = Callable[[Notification, Channel], Awaitable[bool]]

# Channels whose copy is HTML; the rest get plain text.
HTML_CHANNELS = frozenset({Channel.EMAIL, Channel.IN_APP})


@dataclass(frozen=True)
class ChannelOutcome:
    """Result of one channel delivery attempt, produced by its own task."""

    channel: Channel
    status: DeliveryStatus
    error: str | None = None


class NotificationSender:
    """Apply the preference gate, then fan out to the channel providers.

    Each channel is handled by an entry of a ``Channel -> handler`` map.
    Providers that were not configured get a handler that always reports
    failure. Channel outcomes are collected independently and merged into a
    fresh state list once every channel task has settled.
    """

    def __init__(
        self,
        notification_store: NotificationStore,
        renderer: TemplateRenderer,
        *,
        email_provider: EmailProvider | None = None,
        sms_provider: SmsProvider | None = None,
        push_provider: PushProvider | None = None,
        preference_store: PreferenceStore | None = None,
        channel_timeout: float | None = None,
    ) -> None:
        self._store = notification_store
        self._renderer = renderer
        self._preferences = preference_store
        self._channel_timeout = channel_timeout
        self._handlers: dict[Channel, ChannelHandler] = {
            Channel.EMAIL: self._email_handler(email_provider),
            Channel.SMS: self._sms_handler(sms_provider),
            Channel.PUSH: self._push_handler(push_provider),
            Channel.IN_APP: self._deliver_in_app,
        }

    async def send(self, notification: Notification) -> Notification:
        """Deliver ``notification`` and persist its final channel states.

        Raises :class:`ValidationFailure` for integrity violations and
        :class:`ChannelNotSupported` for channels without a handler; in both
        cases nothing is sent.
        """

        validate_notification(notification)
        for state in notification.delivery_channels_state:
            if state.channel not in self._handlers:
                raise ChannelNotSupported(state.channel)

        recipient = notification.recipient
        if self._preferences is not None:
            enabled = await self._preferences.is_route_enabled(recipient.id, notification.route)
            if not enabled:
                logger.info(
                    "User %s disabled route %s; skipping notification %s",
                    recipient.id,
                    notification.route,
                    notification.id,
                )
                notification.delivery_channels_state = [
                    state.transition(DeliveryStatus.SKIPPED) if state.is_pending else state
                    for state in notification.delivery_channels_state
                ]
                await self._store.update_batch([notification])
                return notification

        pending = [state for state in notification.delivery_channels_state if state.is_pending]
        results = await asyncio.gather(
            *(self._deliver(notification, state.channel) for state in pending),
            return_exceptions=True,
        )

        outcomes: dict[Channel, ChannelOutcome] = {}
        for state, result in zip(pending, results):
            if isinstance(result, ChannelOutcome):
                outcomes[state.channel] = result
            elif isinstance(result, asyncio.CancelledError):
                logger.warning(
                    "Delivery of notification %s over %s was cancelled; leaving it pending",
                    notification.id,
                    state.channel.value,
                )
            else:
                outcomes[state.channel] = ChannelOutcome(
                    state.channel, DeliveryStatus.FAILED, error=repr(result)
                )

        notification.delivery_channels_state = self._merge(
            notification.delivery_channels_state, outcomes
        )
        await self._store.update_batch([notification])
        return notification

    @staticmethod
    def _merge(
        states: list[ChannelDeliveryState], outcomes: dict[Channel, ChannelOutcome]
    ) -> list[ChannelDeliveryState]:
        merged: list[ChannelDeliveryState] = []
        for state in states:
            outcome = outcomes.get(state.channel)
            if outcome is None or not state.is_pending:
                merged.append(state)
            else:
                merged.append(state.transition(outcome.status))
        return merged

    async def _deliver(self, notification: Notification, channel: Channel) -> ChannelOutcome:
        handler = self._handlers[channel]
        try:
            if self._channel_timeout is not None:
                delivered = await asyncio.wait_for(
                    handler(notification, channel), timeout=self._channel_timeout
                )
            else:
                delivered = await handler(notification, channel)
        except Exception as exc:
            logger.exception(
                "Channel %s raised while delivering notification %s",
                channel.value,
                notification.id,
            )
            return ChannelOutcome(channel, DeliveryStatus.FAILED, error=str(exc) or repr(exc))

        if not delivered:
            logger.warning(
                "Channel %s failed to deliver notification %s to user %s",
                channel.value,
                notification.id,
                notification.recipient_id,
            )
            return ChannelOutcome(channel, DeliveryStatus.FAILED)
        return ChannelOutcome(channel, DeliveryStatus.SENT)

    def _content_for(self, notification: Notification, channel: Channel) -> str:
        """Channel override rendered with the shared data, else the stored message."""

        template = notification.template
        if (
            template is not None
            and notification.template_data is not None
            and template.has_override(channel)
        ):
            rendered = self._renderer.render(
                template.content_template_for(channel),
                notification.template_data,
                html=channel in HTML_CHANNELS,
            )
            if rendered.strip():
                return rendered
        return notification.message

    def _subject_for(self, notification: Notification) -> str:
        template = notification.template
        if (
            template is not None
            and template.subject
            and template.subject.strip()
            and notification.template_data is not None
        ):
            rendered = self._renderer.render(
                template.subject, notification.template_data, html=False
            )
            if rendered.strip():
                return rendered
        return notification.title

    @staticmethod
    def _unconfigured(name: str) -> ChannelHandler:
        async def handler(notification: Notification, channel: Channel) -> bool:
            logger.warning(
                "%s provider is not configured; notification %s cannot be delivered",
                name,
                notification.id,
            )
            return False

        return handler

    def _email_handler(self, provider: EmailProvider | None) -> ChannelHandler:
        if provider is None:
            return self._unconfigured("Email")

        async def handler(notification: Notification, channel: Channel) -> bool:
            address = (notification.recipient.email or "").strip()
            if not address:
                logger.info("User %s has no email address", notification.recipient_id)
                return False
            return await provider.send_email(
                address, self._subject_for(notification), self._content_for(notification, channel)
            )

        return handler

    def _sms_handler(self, provider: SmsProvider | None) -> ChannelHandler:
        if provider is None:
            return self._unconfigured("SMS")

        async def handler(notification: Notification, channel: Channel) -> bool:
            phone = (notification.recipient.phone_number or "").strip()
            if not phone:
                logger.info("User %s has no phone number", notification.recipient_id)
                return False
            return await provider.send_sms(phone, self._content_for(notification, channel))

        return handler

    def _push_handler(self, provider: PushProvider | None) -> ChannelHandler:
        if provider is None:
            return self._unconfigured("Push")

        async def handler(notification: Notification, channel: Channel) -> bool:
            token = (notification.recipient.device_token or "").strip()
            if not token:
                logger.info("User %s has no device token", notification.recipient_id)
                return False
            return await provider.send_push(
                token, self._subject_for(notification), self._content_for(notification, channel)
            )

        return handler

    @staticmethod
    async def _deliver_in_app(notification: Notification, channel: Channel) -> bool:
        # The persisted notification is the in-app inbox entry.
        return True


__all__ = ["ChannelOutcome", "NotificationSender"]
