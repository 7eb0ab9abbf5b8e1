"""Shared fixtures for the test suite."""

from __future__ import annotations

import pytest

from notifyhub.domain.entities import NotificationTemplate, User
from notifyhub.infrastructure.database import build_engine, build_session_factory, initialize_database


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def ann() -> User:
    return User(
        id=1,
        name="Ann",
        email="ann@example.com",
        phone_number="+15550001",
        device_token="device-ann",
    )


@pytest.fixture
def bob() -> User:
    return User(id=2, name="Bob", email="bob@example.com")


@pytest.fixture
def order_template() -> NotificationTemplate:
    return NotificationTemplate(
        name="OrderCreated",
        subject="Order {{OrderNumber}}",
        common_content="Hello {{CustomerName}}, order {{OrderNumber}} total {{OrderTotal}}",
        channel_overrides={},
    )


@pytest.fixture
def session_factory(tmp_path):
    """Session factory bound to a fresh SQLite file with all tables created."""

    engine = build_engine(f"sqlite:///{tmp_path / 'notifyhub-test.db'}")
    initialize_database(engine)
    try:
        yield build_session_factory(engine)
    finally:
        engine.dispose()
