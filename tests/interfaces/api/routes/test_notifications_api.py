"""Integration tests for the notification and route preference endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from main import create_app
from notifyhub.config import Settings
from notifyhub.infrastructure.models import UserModel
from notifyhub.interfaces.api.dependencies import build_services
from tests.fakes import RecordingEmailProvider


@pytest.fixture
def email_provider() -> RecordingEmailProvider:
    return RecordingEmailProvider()


@pytest.fixture
def user_id(session_factory) -> int:
    with session_factory() as session:
        user = UserModel(name="Ann", email="ann@example.com", phone_number="+15550001")
        session.add(user)
        session.commit()
        return user.id


@pytest.fixture
def client(session_factory, email_provider):
    services = build_services(
        Settings(_env_file=None), session_factory, email_provider=email_provider
    )
    with TestClient(create_app(services)) as test_client:
        yield test_client


def _order_payload(user_id: int, **overrides) -> dict:
    payload = {
        "route": "OrderCreated",
        "channels": ["Email", "InApp"],
        "parameters": {"customerId": user_id, "orderNumber": "ORD-1", "orderTotal": 9.99},
    }
    payload.update(overrides)
    return payload


def test_dispatch_and_read_back(client, user_id, email_provider):
    response = client.post("/notifications/", json=_order_payload(user_id))

    assert response.status_code == 201
    summary = response.json()
    assert summary["route"] == "OrderCreated"
    assert summary["title"] == "Order ORD-1 confirmed"
    assert summary["status_message"] == "Notification dispatched to 1 recipient."
    assert [r["name"] for r in summary["recipients"]] == ["Ann"]
    (notification_id,) = summary["created_notification_ids"]
    assert summary["delivery"][notification_id] == {"Email": "Sent", "InApp": "Sent"}
    assert email_provider.sent[0][0] == "ann@example.com"

    detail = client.get(f"/notifications/{notification_id}")
    assert detail.status_code == 200
    body = detail.json()
    assert "Hello Ann" in body["message"]
    assert body["recipient"]["id"] == user_id
    assert {s["channel"]: s["status"] for s in body["delivery_channels_state"]} == {
        "Email": "Sent",
        "InApp": "Sent",
    }

    by_status = client.get("/notifications/by-status/sent")
    assert [n["id"] for n in by_status.json()] == [notification_id]


def test_mark_as_read(client, user_id):
    created = client.post("/notifications/", json=_order_payload(user_id)).json()
    ids = created["created_notification_ids"]

    response = client.post(f"/users/{user_id}/notifications/read", json={"ids": ids})

    assert response.status_code == 204
    unread = client.get(f"/notifications/by-user/{user_id}", params={"only_unread": True})
    assert unread.json() == []
    everything = client.get(f"/notifications/by-user/{user_id}").json()
    assert everything[0]["read_at"] is not None
    assert {s["status"] for s in everything[0]["delivery_channels_state"]} == {"Read"}


@pytest.mark.parametrize(
    ("payload_overrides", "expected_status"),
    [
        ({"route": "Nope"}, 404),
        ({"parameters": {"orderNumber": "ORD-1"}}, 400),
        ({"channels": ["Fax"]}, 400),
    ],
)
def test_dispatch_errors(client, user_id, payload_overrides, expected_status):
    response = client.post("/notifications/", json=_order_payload(user_id, **payload_overrides))

    assert response.status_code == expected_status
    assert response.json()["detail"]


def test_query_errors(client):
    assert client.get("/notifications/by-status/bounced").status_code == 400
    missing = client.get("/notifications/00000000-0000-0000-0000-000000000000")
    assert missing.status_code == 404


def test_route_catalog(client):
    response = client.get("/routes")

    assert response.status_code == 200
    routes = {route["name"]: route for route in response.json()}
    assert set(routes) == {"OrderCreated", "TaskAssigned", "UserRegistered"}
    assert routes["OrderCreated"]["object_kind"]["name"] == "Order"
    assert "order" in routes["OrderCreated"]["tags"]


def test_disabled_route_skips_delivery(client, user_id, email_provider):
    update = client.put(
        f"/users/{user_id}/routes",
        json={"preferences": [{"route": "OrderCreated", "enabled": False}]},
    )
    assert update.status_code == 200
    assert {p["route"]: p["enabled"] for p in update.json()}["OrderCreated"] is False

    summary = client.post("/notifications/", json=_order_payload(user_id)).json()

    (statuses,) = summary["delivery"].values()
    assert statuses == {"Email": "Skipped", "InApp": "Skipped"}
    assert email_provider.sent == []

    listed = client.get(f"/users/{user_id}/routes").json()
    assert [(p["route"], p["enabled"]) for p in listed] == [
        ("OrderCreated", False),
        ("TaskAssigned", True),
        ("UserRegistered", True),
    ]


def test_unknown_route_preference_is_rejected(client, user_id):
    response = client.put(
        f"/users/{user_id}/routes",
        json={"preferences": [{"route": "Nope", "enabled": False}]},
    )

    assert response.status_code == 404
