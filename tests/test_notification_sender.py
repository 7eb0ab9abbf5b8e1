"""Tests for per-channel delivery and the preference gate."""

from __future__ import annotations

import asyncio
import logging
import uuid

import pytest

from notifyhub.application.use_cases.notifications import NotificationSender
from notifyhub.domain.entities import (
    Channel,
    ChannelDeliveryState,
    DeliveryStatus,
    Notification,
    NotificationTemplate,
    User,
    default_channel_states,
)
from notifyhub.domain.errors import ValidationFailure
from notifyhub.infrastructure.templates import JinjaTemplateRenderer
from notifyhub.utils import utc_now
from tests.fakes import (
    FakeNotificationStore,
    FakePreferenceStore,
    RecordingEmailProvider,
    RecordingPushProvider,
    RecordingSmsProvider,
)


def _notification(recipient, channels, *, template=None, data=None, route="OrderCreated"):
    return Notification(
        id=uuid.uuid4(),
        title="Order ORD-1",
        message="Hello Ann",
        route=route,
        created_at=utc_now(),
        recipient=recipient,
        template=template,
        delivery_channels_state=default_channel_states(channels),
        template_data=data,
    )


def _sender(store, **kwargs) -> NotificationSender:
    return NotificationSender(store, JinjaTemplateRenderer(), **kwargs)


@pytest.mark.anyio
async def test_all_channels_sent_and_persisted(ann):
    store = FakeNotificationStore()
    email, sms, push = RecordingEmailProvider(), RecordingSmsProvider(), RecordingPushProvider()
    sender = _sender(store, email_provider=email, sms_provider=sms, push_provider=push)
    notification = _notification(
        ann, [Channel.EMAIL, Channel.SMS, Channel.PUSH, Channel.IN_APP]
    )

    result = await sender.send(notification)

    assert set(result.statuses().values()) == {DeliveryStatus.SENT}
    assert email.sent == [("ann@example.com", "Order ORD-1", "Hello Ann")]
    assert sms.sent == [("+15550001", "Hello Ann")]
    assert push.sent == [("device-ann", "Order ORD-1", "Hello Ann")]
    assert store.updated == [[notification]]


@pytest.mark.anyio
async def test_disabled_route_skips_every_channel_without_provider_calls(ann):
    store = FakeNotificationStore()
    email, push = RecordingEmailProvider(), RecordingPushProvider()
    sender = _sender(
        store,
        email_provider=email,
        push_provider=push,
        preference_store=FakePreferenceStore(disabled=[(1, "OrderCreated")]),
    )

    result = await sender.send(_notification(ann, [Channel.EMAIL, Channel.PUSH]))

    assert result.statuses() == {
        Channel.EMAIL: DeliveryStatus.SKIPPED,
        Channel.PUSH: DeliveryStatus.SKIPPED,
    }
    assert email.sent == [] and push.sent == []
    assert len(store.updated) == 1


@pytest.mark.anyio
async def test_other_routes_are_not_affected_by_opt_out(ann):
    sender = _sender(
        FakeNotificationStore(),
        preference_store=FakePreferenceStore(disabled=[(1, "TaskAssigned")]),
    )

    result = await sender.send(_notification(ann, [Channel.IN_APP]))

    assert result.status_for(Channel.IN_APP) is DeliveryStatus.SENT


@pytest.mark.anyio
async def test_missing_email_fails_only_that_channel():
    user = User(id=3, name="NoMail", device_token="tok")
    push = RecordingPushProvider()
    email = RecordingEmailProvider()
    sender = _sender(FakeNotificationStore(), email_provider=email, push_provider=push)

    result = await sender.send(_notification(user, [Channel.EMAIL, Channel.PUSH]))

    assert result.statuses() == {
        Channel.EMAIL: DeliveryStatus.FAILED,
        Channel.PUSH: DeliveryStatus.SENT,
    }
    assert email.sent == []


@pytest.mark.anyio
async def test_sms_without_phone_number_fails(bob):
    sms = RecordingSmsProvider()
    sender = _sender(FakeNotificationStore(), sms_provider=sms)

    result = await sender.send(_notification(bob, [Channel.SMS]))

    assert result.status_for(Channel.SMS) is DeliveryStatus.FAILED
    assert sms.sent == []


@pytest.mark.anyio
async def test_missing_phone_fails_sms_while_email_is_sent(bob):
    store = FakeNotificationStore()
    email, sms = RecordingEmailProvider(), RecordingSmsProvider()
    sender = _sender(store, email_provider=email, sms_provider=sms)
    notification = _notification(bob, [Channel.EMAIL, Channel.SMS])

    result = await sender.send(notification)

    assert result.statuses() == {
        Channel.EMAIL: DeliveryStatus.SENT,
        Channel.SMS: DeliveryStatus.FAILED,
    }
    assert email.sent == [("bob@example.com", "Order ORD-1", "Hello Ann")]
    assert sms.sent == []
    assert store.updated == [[notification]]


@pytest.mark.anyio
async def test_provider_exception_is_isolated(ann, caplog):
    sender = _sender(
        FakeNotificationStore(),
        email_provider=RecordingEmailProvider(error=RuntimeError("smtp down")),
        push_provider=RecordingPushProvider(),
    )

    with caplog.at_level(logging.ERROR):
        result = await sender.send(_notification(ann, [Channel.EMAIL, Channel.PUSH]))

    assert result.statuses() == {
        Channel.EMAIL: DeliveryStatus.FAILED,
        Channel.PUSH: DeliveryStatus.SENT,
    }
    assert "smtp down" in caplog.text


@pytest.mark.anyio
async def test_provider_reporting_false_marks_failed(ann):
    sender = _sender(FakeNotificationStore(), push_provider=RecordingPushProvider(result=False))

    result = await sender.send(_notification(ann, [Channel.PUSH]))

    assert result.status_for(Channel.PUSH) is DeliveryStatus.FAILED


@pytest.mark.anyio
async def test_unconfigured_provider_marks_failed(ann):
    sender = _sender(FakeNotificationStore())

    result = await sender.send(_notification(ann, [Channel.SMS, Channel.IN_APP]))

    assert result.statuses() == {
        Channel.SMS: DeliveryStatus.FAILED,
        Channel.IN_APP: DeliveryStatus.SENT,
    }


@pytest.mark.anyio
async def test_channel_override_is_rendered_at_send_time(ann):
    template = NotificationTemplate(
        name="OrderCreated",
        subject="Order {{OrderNumber}}",
        common_content="Hello {{CustomerName}}",
        channel_overrides={Channel.SMS: "SMS for order {{OrderNumber}}"},
    )
    sms, email = RecordingSmsProvider(), RecordingEmailProvider()
    sender = _sender(FakeNotificationStore(), sms_provider=sms, email_provider=email)
    notification = _notification(
        ann,
        [Channel.SMS, Channel.EMAIL],
        template=template,
        data={"OrderNumber": "ORD-1", "CustomerName": "Ann"},
    )

    await sender.send(notification)

    assert sms.sent == [("+15550001", "SMS for order ORD-1")]
    assert email.sent == [("ann@example.com", "Order ORD-1", "Hello Ann")]
    assert notification.message == "Hello Ann"


@pytest.mark.anyio
async def test_text_overrides_are_not_html_escaped(ann):
    template = NotificationTemplate(
        name="OrderCreated",
        subject="Order {{OrderNumber}}",
        common_content="<p>{{Note}}</p>",
        channel_overrides={
            Channel.SMS: "Note: {{Note}}",
            Channel.EMAIL: "<p>Note: {{Note}}</p>",
        },
    )
    sms, email = RecordingSmsProvider(), RecordingEmailProvider()
    sender = _sender(FakeNotificationStore(), sms_provider=sms, email_provider=email)
    notification = _notification(
        ann,
        [Channel.SMS, Channel.EMAIL],
        template=template,
        data={"OrderNumber": "A&B", "Note": "<fragile>"},
    )

    await sender.send(notification)

    assert sms.sent == [("+15550001", "Note: <fragile>")]
    assert email.sent == [("ann@example.com", "Order A&B", "<p>Note: &lt;fragile&gt;</p>")]


@pytest.mark.anyio
async def test_only_pending_channels_are_attempted(ann):
    push = RecordingPushProvider()
    sender = _sender(FakeNotificationStore(), push_provider=push)
    notification = _notification(ann, [Channel.PUSH])
    notification.delivery_channels_state = [
        ChannelDeliveryState(Channel.PUSH, DeliveryStatus.FAILED),
        ChannelDeliveryState(Channel.IN_APP),
    ]

    result = await sender.send(notification)

    assert push.sent == []
    assert result.statuses() == {
        Channel.PUSH: DeliveryStatus.FAILED,
        Channel.IN_APP: DeliveryStatus.SENT,
    }


@pytest.mark.anyio
async def test_slow_channel_times_out_as_failed(ann):
    class SlowPush:
        async def send_push(self, device_token, title, body):
            await asyncio.sleep(5)
            return True

    sender = _sender(FakeNotificationStore(), push_provider=SlowPush(), channel_timeout=0.05)

    result = await sender.send(_notification(ann, [Channel.PUSH, Channel.IN_APP]))

    assert result.statuses() == {
        Channel.PUSH: DeliveryStatus.FAILED,
        Channel.IN_APP: DeliveryStatus.SENT,
    }


@pytest.mark.anyio
async def test_cancelled_send_never_marks_channels_sent(ann):
    started = asyncio.Event()

    class BlockingPush:
        async def send_push(self, device_token, title, body):
            started.set()
            await asyncio.sleep(10)
            return True

    store = FakeNotificationStore()
    sender = _sender(store, push_provider=BlockingPush())
    notification = _notification(ann, [Channel.PUSH])

    task = asyncio.create_task(sender.send(notification))
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert notification.status_for(Channel.PUSH) is DeliveryStatus.PENDING
    assert store.updated == []


@pytest.mark.anyio
async def test_invalid_notification_is_rejected_before_sending():
    email = RecordingEmailProvider()
    sender = _sender(FakeNotificationStore(), email_provider=email)
    notification = _notification(None, [Channel.EMAIL])
    notification.title = " "
    notification.message = ""

    with pytest.raises(ValidationFailure) as excinfo:
        await sender.send(notification)

    assert len(excinfo.value.errors) == 3
    assert email.sent == []
