"""Shared plumbing for route data resolvers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from notifyhub.domain.entities import NotificationRequest, User
from notifyhub.domain.errors import MissingRequiredParameter
from notifyhub.domain.ports import UserStore

logger = logging.getLogger(__name__)

ParametersT = TypeVar("ParametersT", bound="RouteParameters")


def _normalize_key(key: str) -> str:
    return key.replace("_", "").replace("-", "").lower()


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


class RouteParameters(BaseModel):
    """Typed view over ``NotificationRequest.parameters``.

    Keys are matched ignoring case, underscores and dashes, so ``customerId``,
    ``CustomerId`` and ``customer_id`` all populate ``customer_id``.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def parse(cls: type[ParametersT], route: str, parameters: Any) -> ParametersT:
        fields = {_normalize_key(name): name for name in cls.model_fields}
        payload: dict[str, Any] = {}
        if isinstance(parameters, Mapping):
            for key, value in parameters.items():
                name = fields.get(_normalize_key(str(key)))
                if name is not None:
                    payload[name] = value

        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            invalid = []
            for error in exc.errors():
                location = error.get("loc") or ()
                if location:
                    field_name = _camel_case(str(location[0]))
                    if field_name not in invalid:
                        invalid.append(field_name)
            raise MissingRequiredParameter(route, invalid) from exc


class UserLookupResolver:
    """Base class for resolvers whose recipients are looked up by user id."""

    route: ClassVar[str]
    parameters_model: ClassVar[type[RouteParameters]]

    def __init__(self, user_repository: UserStore) -> None:
        self._users = user_repository

    def parameters(self, request: NotificationRequest) -> Any:
        return self.parameters_model.parse(self.route, request.parameters)

    async def _find_user(self, user_id: int) -> User | None:
        user = await self._users.get(user_id)
        if user is None:
            logger.info("Route %s: user %s not found", self.route, user_id)
        return user

    async def _require_user(self, user_id: int, parameter: str) -> User:
        user = await self._find_user(user_id)
        if user is None:
            raise MissingRequiredParameter(self.route, [parameter])
        return user

    async def _single_recipient(self, user_id: int) -> list[User]:
        user = await self._find_user(user_id)
        return [user] if user is not None else []


__all__ = ["RouteParameters", "UserLookupResolver"]
