"""Persistence of per-user route preferences."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from notifyhub.domain.entities import UserRoutePreference
from notifyhub.infrastructure.models import UserRoutePreferenceModel

from .base import SessionRepository


class UserRoutePreferenceRepository(SessionRepository):
    """Routes are enabled unless the user stored an explicit opt-out."""

    async def is_route_enabled(self, user_id: int, route: str) -> bool:
        return await self._run(self._is_route_enabled, user_id, route)

    async def list_for_user(self, user_id: int) -> Sequence[UserRoutePreference]:
        return await self._run(self._list_for_user, user_id)

    async def set_preferences(
        self, user_id: int, preferences: Iterable[tuple[str, bool]]
    ) -> None:
        await self._run(self._set_preferences, user_id, list(preferences))

    def _is_route_enabled(self, session: Session, user_id: int, route: str) -> bool:
        model = (
            session.query(UserRoutePreferenceModel)
            .filter_by(user_id=user_id, route=route)
            .first()
        )
        return model.enabled if model is not None else True

    def _list_for_user(self, session: Session, user_id: int) -> list[UserRoutePreference]:
        query = (
            session.query(UserRoutePreferenceModel)
            .filter(UserRoutePreferenceModel.user_id == user_id)
            .order_by(UserRoutePreferenceModel.route)
        )
        return [self._to_entity(model) for model in query.all()]

    def _set_preferences(
        self, session: Session, user_id: int, preferences: list[tuple[str, bool]]
    ) -> None:
        existing = {
            model.route: model
            for model in session.query(UserRoutePreferenceModel)
            .filter(UserRoutePreferenceModel.user_id == user_id)
            .all()
        }
        for route, enabled in preferences:
            model = existing.get(route)
            if model is None:
                model = UserRoutePreferenceModel(user_id=user_id, route=route)
                session.add(model)
                existing[route] = model
            model.enabled = bool(enabled)
        session.commit()

    @staticmethod
    def _to_entity(model: UserRoutePreferenceModel) -> UserRoutePreference:
        return UserRoutePreference(
            id=model.id, user_id=model.user_id, route=model.route, enabled=model.enabled
        )


__all__ = ["UserRoutePreferenceRepository"]
