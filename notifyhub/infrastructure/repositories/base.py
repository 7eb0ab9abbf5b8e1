"""Run synchronous SQLAlchemy work from async callers."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial
from typing import Any, TypeVar

import anyio
from sqlalchemy.orm import Session, sessionmaker

T = TypeVar("T")


class SessionRepository:
    """Base for repositories that open one short-lived session per call.

    ORM work is synchronous and runs in a worker thread so that the event
    loop never blocks on the database.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    async def _run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        return await anyio.to_thread.run_sync(partial(self._call, func, *args, **kwargs))

    def _call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        with self._session_factory() as session:
            try:
                return func(session, *args, **kwargs)
            except Exception:
                session.rollback()
                raise


__all__ = ["SessionRepository"]
