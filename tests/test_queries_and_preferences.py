"""Tests for query, preference and retention use cases."""

from __future__ import annotations

import logging
import uuid
from datetime import timedelta

import pytest

from notifyhub.application.resolvers import build_route_registry
from notifyhub.application.use_cases.notifications import (
    cleanup_old_notifications,
    get_notification,
    list_notifications_by_status,
    list_user_notifications,
    mark_notifications_as_read,
)
from notifyhub.application.use_cases.preferences import (
    get_user_route_preferences,
    list_route_catalog,
    set_user_route_preferences,
)
from notifyhub.domain.entities import Channel, DeliveryStatus, Notification, default_channel_states
from notifyhub.domain.errors import NotificationNotFound, RouteNotFound, UnknownDeliveryStatus
from notifyhub.utils import utc_now
from tests.fakes import FakeNotificationStore, FakePreferenceStore, FakeUserStore


def _stored(recipient, *, age_days=0, status=DeliveryStatus.PENDING):
    states = [
        state if status is DeliveryStatus.PENDING else state.transition(status)
        for state in default_channel_states([Channel.IN_APP])
    ]
    return Notification(
        id=uuid.uuid4(),
        title="T",
        message="M",
        route="OrderCreated",
        created_at=utc_now() - timedelta(days=age_days),
        recipient=recipient,
        delivery_channels_state=states,
    )


@pytest.fixture
def registry(ann):
    return build_route_registry(FakeUserStore([ann]))


@pytest.mark.anyio
async def test_get_notification_raises_when_missing():
    with pytest.raises(NotificationNotFound):
        await get_notification(FakeNotificationStore(), uuid.uuid4())


@pytest.mark.anyio
async def test_list_user_notifications_pages_newest_first(ann):
    store = FakeNotificationStore()
    notifications = [_stored(ann, age_days=days) for days in range(5)]
    await store.save_batch(notifications)

    first_page = await list_user_notifications(store, 1, page=1, page_size=2)
    third_page = await list_user_notifications(store, 1, page=3, page_size=2)

    assert [n.id for n in first_page] == [notifications[0].id, notifications[1].id]
    assert [n.id for n in third_page] == [notifications[4].id]


@pytest.mark.anyio
async def test_list_by_status_parses_case_insensitively(ann):
    store = FakeNotificationStore()
    failed = _stored(ann, status=DeliveryStatus.FAILED)
    await store.save_batch([failed, _stored(ann, status=DeliveryStatus.SENT)])

    result = await list_notifications_by_status(store, "failed")

    assert [n.id for n in result] == [failed.id]
    with pytest.raises(UnknownDeliveryStatus):
        await list_notifications_by_status(store, "bounced")


@pytest.mark.anyio
async def test_mark_as_read_ignores_empty_and_duplicate_ids(ann):
    store = FakeNotificationStore()
    notification = _stored(ann)
    await store.save_batch([notification])

    assert await mark_notifications_as_read(store, 1, []) == 0
    assert await mark_notifications_as_read(store, 1, [notification.id, notification.id]) == 1


@pytest.mark.anyio
async def test_cleanup_deletes_only_old_notifications(ann):
    store = FakeNotificationStore()
    old, recent = _stored(ann, age_days=40), _stored(ann, age_days=1)
    await store.save_batch([old, recent])

    deleted = await cleanup_old_notifications(store, 30)

    assert deleted == 1
    assert list(store.items) == [recent.id]


@pytest.mark.anyio
async def test_cleanup_with_non_positive_retention_is_a_noop(caplog):
    store = FakeNotificationStore()

    with caplog.at_level(logging.WARNING):
        assert await cleanup_old_notifications(store, 0) == 0

    assert store.deleted_before == []
    assert "Invalid retention period" in caplog.text


def test_route_catalog_lists_every_route(registry):
    assert [config.name for config in list_route_catalog(registry)] == [
        "OrderCreated",
        "TaskAssigned",
        "UserRegistered",
    ]


@pytest.mark.anyio
async def test_preferences_default_to_enabled(registry):
    views = await get_user_route_preferences(registry, FakePreferenceStore(), 1)

    assert [(v.route, v.enabled) for v in views] == [
        ("OrderCreated", True),
        ("TaskAssigned", True),
        ("UserRegistered", True),
    ]
    assert views[0].display_name == "Order Created"


@pytest.mark.anyio
async def test_set_preferences_merges_with_defaults(registry):
    store = FakePreferenceStore()

    views = await set_user_route_preferences(registry, store, 1, [("TaskAssigned", False)])

    assert {v.route: v.enabled for v in views} == {
        "OrderCreated": True,
        "TaskAssigned": False,
        "UserRegistered": True,
    }
    assert await store.is_route_enabled(1, "TaskAssigned") is False
    assert await store.is_route_enabled(2, "TaskAssigned") is True


@pytest.mark.anyio
async def test_set_preferences_rejects_unknown_routes(registry):
    store = FakePreferenceStore()

    with pytest.raises(RouteNotFound):
        await set_user_route_preferences(registry, store, 1, [("Nope", False)])

    assert store.rows == {}
