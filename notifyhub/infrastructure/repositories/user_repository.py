"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notifyhub.domain.entities import User
from notifyhub.infrastructure.models import UserModel
from notifyhub.utils import from_naive_utc, to_naive_utc, utc_now

from .base import SessionRepository


class UserRepository(SessionRepository):
    """Provide lookup and creation of notification recipients."""

    async def get(self, user_id: int) -> User | None:
        return await self._run(self._get, user_id)

    async def list(self, skip: int = 0, limit: int = 100) -> Sequence[User]:
        return await self._run(self._list, skip, limit)

    async def create(self, user: User) -> User:
        return await self._run(self._create, user)

    def _get(self, session: Session, user_id: int) -> User | None:
        model = session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def _list(self, session: Session, skip: int, limit: int) -> list[User]:
        query = session.query(UserModel).order_by(UserModel.id).offset(skip).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def _create(self, session: Session, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        session.add(model)
        session.commit()
        session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email
        model.phone_number = user.phone_number
        model.device_token = user.device_token
        model.created_at = to_naive_utc(user.created_at or utc_now())

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            phone_number=model.phone_number,
            device_token=model.device_token,
            created_at=from_naive_utc(model.created_at),
        )


__all__ = ["UserRepository"]
