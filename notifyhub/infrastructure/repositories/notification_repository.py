"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from notifyhub.domain.entities import (
    ChannelDeliveryState,
    DeliveryStatus,
    Notification,
    NotificationMetadata,
    parse_channel,
    parse_delivery_status,
)
from notifyhub.infrastructure.models import NotificationChannelStateModel, NotificationModel
from notifyhub.utils import from_naive_utc, to_naive_utc, utc_now

from .base import SessionRepository
from .user_repository import UserRepository


class NotificationRepository(SessionRepository):
    """Store notifications together with their per-channel delivery states."""

    async def save_batch(self, notifications: Sequence[Notification]) -> None:
        if notifications:
            await self._run(self._save_batch, list(notifications))

    async def update_batch(self, notifications: Sequence[Notification]) -> None:
        if notifications:
            await self._run(self._update_batch, list(notifications))

    async def get(self, notification_id: UUID) -> Notification | None:
        return await self._run(self._get, notification_id)

    async def list_for_user(
        self,
        user_id: int,
        *,
        only_unread: bool = False,
        limit: int | None = 50,
        offset: int = 0,
    ) -> Sequence[Notification]:
        return await self._run(
            self._list_for_user, user_id, only_unread=only_unread, limit=limit, offset=offset
        )

    async def list_by_status(
        self, status: DeliveryStatus, *, limit: int | None = 100
    ) -> Sequence[Notification]:
        return await self._run(self._list_by_status, status, limit=limit)

    async def mark_as_read(self, notification_ids: Iterable[UUID], *, user_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        return await self._run(self._mark_as_read, ids, user_id=user_id)

    async def delete_older_than(self, cutoff: datetime) -> int:
        return await self._run(self._delete_older_than, cutoff)

    def _save_batch(self, session: Session, notifications: list[Notification]) -> None:
        for notification in notifications:
            model = NotificationModel(id=notification.id)
            self._apply_entity_to_model(model, notification, include_creation_fields=True)
            session.add(model)
        session.commit()

    def _update_batch(self, session: Session, notifications: list[Notification]) -> None:
        for notification in notifications:
            model = session.get(NotificationModel, notification.id)
            if model is None:
                msg = f"Notification with id {notification.id} not found"
                raise ValueError(msg)
            self._apply_entity_to_model(model, notification, include_creation_fields=False)
        session.commit()

    def _get(self, session: Session, notification_id: UUID) -> Notification | None:
        model = session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def _list_for_user(
        self,
        session: Session,
        user_id: int,
        *,
        only_unread: bool,
        limit: int | None,
        offset: int,
    ) -> list[Notification]:
        query = session.query(NotificationModel).filter(NotificationModel.user_id == user_id)
        if only_unread:
            query = query.filter(NotificationModel.read_at.is_(None))
        query = query.order_by(NotificationModel.created_at.desc(), NotificationModel.id)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def _list_by_status(
        self, session: Session, status: DeliveryStatus, *, limit: int | None
    ) -> list[Notification]:
        matching_ids = select(NotificationChannelStateModel.notification_id).where(
            NotificationChannelStateModel.status == status.value
        )
        query = (
            session.query(NotificationModel)
            .filter(NotificationModel.id.in_(matching_ids))
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id)
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def _mark_as_read(self, session: Session, ids: list[UUID], *, user_id: int) -> int:
        models = (
            session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.read_at.is_(None))
            .all()
        )
        read_at = to_naive_utc(utc_now())
        for model in models:
            model.read_at = read_at
            for state in model.channel_states:
                if state.status == DeliveryStatus.SENT.value:
                    state.status = DeliveryStatus.READ.value
                    state.updated_at = read_at
        session.commit()
        return len(models)

    def _delete_older_than(self, session: Session, cutoff: datetime) -> int:
        old_ids = [
            notification_id
            for (notification_id,) in session.query(NotificationModel.id)
            .filter(NotificationModel.created_at < to_naive_utc(cutoff))
            .all()
        ]
        if not old_ids:
            return 0
        session.query(NotificationChannelStateModel).filter(
            NotificationChannelStateModel.notification_id.in_(old_ids)
        ).delete(synchronize_session=False)
        deleted = (
            session.query(NotificationModel)
            .filter(NotificationModel.id.in_(old_ids))
            .delete(synchronize_session=False)
        )
        session.commit()
        return deleted

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.created_at = to_naive_utc(notification.created_at or utc_now())
            model.user_id = notification.recipient_id
            model.route = notification.route
            model.template_name = (
                notification.template.name if notification.template is not None else None
            )
        model.title = notification.title
        model.message = notification.message or ""
        model.extra_metadata = [
            {"key": item.key, "value": item.value} for item in notification.metadata
        ]
        model.read_at = to_naive_utc(notification.read_at)

        changed_at = to_naive_utc(utc_now())
        existing = {state.channel: state for state in model.channel_states}
        for position, state in enumerate(notification.delivery_channels_state):
            row = existing.get(state.channel.value)
            if row is None:
                model.channel_states.append(
                    NotificationChannelStateModel(
                        channel=state.channel.value,
                        status=state.status.value,
                        position=position,
                        updated_at=changed_at,
                    )
                )
            else:
                if row.status != state.status.value:
                    row.status = state.status.value
                    row.updated_at = changed_at
                row.position = position

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            title=model.title,
            message=model.message or "",
            route=model.route,
            created_at=from_naive_utc(model.created_at),
            recipient=UserRepository._to_entity(model.user) if model.user else None,
            delivery_channels_state=[
                ChannelDeliveryState(
                    channel=parse_channel(state.channel),
                    status=parse_delivery_status(state.status),
                )
                for state in model.channel_states
            ],
            metadata=[
                NotificationMetadata(key=item["key"], value=item["value"])
                for item in model.extra_metadata or []
            ],
            read_at=from_naive_utc(model.read_at),
        )


__all__ = ["NotificationRepository"]
