"""Service wiring and FastAPI dependency utilities."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.orm import Session, sessionmaker

from notifyhub.application.registry import RouteRegistry
from notifyhub.application.resolvers import build_route_registry
from notifyhub.application.use_cases.notifications import (
    NotificationDispatcher,
    NotificationMapper,
    NotificationSender,
)
from notifyhub.config import Settings
from notifyhub.domain.ports import EmailProvider, PushProvider, SmsProvider, TemplateStore
from notifyhub.infrastructure.database import SessionLocal
from notifyhub.infrastructure.providers import (
    build_email_provider,
    build_push_provider,
    build_sms_provider,
)
from notifyhub.infrastructure.repositories import (
    NotificationRepository,
    UserRepository,
    UserRoutePreferenceRepository,
)
from notifyhub.infrastructure.templates import (
    FileSystemTemplateRepository,
    JinjaTemplateRenderer,
)


@dataclass
class NotificationServices:
    """Everything the HTTP layer needs, built once per application."""

    registry: RouteRegistry
    dispatcher: NotificationDispatcher
    notifications: NotificationRepository
    preferences: UserRoutePreferenceRepository
    users: UserRepository
    templates: TemplateStore
    settings: Settings


def build_services(
    settings: Settings,
    session_factory: sessionmaker[Session] | None = None,
    *,
    template_store: TemplateStore | None = None,
    email_provider: EmailProvider | None = None,
    sms_provider: SmsProvider | None = None,
    push_provider: PushProvider | None = None,
) -> NotificationServices:
    """Wire repositories, providers and the dispatch pipeline.

    Providers not passed explicitly are built from ``settings``; channels
    whose provider is not configured fail at delivery time.
    """

    factory = session_factory or SessionLocal
    users = UserRepository(factory)
    notifications = NotificationRepository(factory)
    preferences = UserRoutePreferenceRepository(factory)

    if template_store is None:
        template_store = (
            FileSystemTemplateRepository(settings.templates_path)
            if settings.templates_path
            else FileSystemTemplateRepository.bundled()
        )

    renderer = JinjaTemplateRenderer()
    registry = build_route_registry(users)
    sender = NotificationSender(
        notifications,
        renderer,
        email_provider=email_provider or build_email_provider(settings),
        sms_provider=sms_provider or build_sms_provider(settings),
        push_provider=push_provider or build_push_provider(settings),
        preference_store=preferences,
        channel_timeout=settings.channel_send_timeout_seconds,
    )
    dispatcher = NotificationDispatcher(
        registry,
        template_store,
        notifications,
        NotificationMapper(renderer),
        sender,
    )
    return NotificationServices(
        registry=registry,
        dispatcher=dispatcher,
        notifications=notifications,
        preferences=preferences,
        users=users,
        templates=template_store,
        settings=settings,
    )


def get_services(request: Request) -> NotificationServices:
    """Return the services attached to the running application."""

    return request.app.state.services


__all__ = ["NotificationServices", "build_services", "get_services"]
