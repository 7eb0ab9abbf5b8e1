"""Domain entities describing notification recipients."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """A person that can receive notifications."""

    id: int | None
    name: str
    email: str | None = None
    phone_number: str | None = None
    device_token: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class UserSummary:
    """Public view of a recipient returned by the API."""

    id: int | None
    name: str
    email: str | None
    phone_number: str | None
    created_at: datetime | None

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            phone_number=user.phone_number,
            created_at=user.created_at,
        )


__all__ = ["User", "UserSummary"]
