"""Unit tests for the SSE notification broadcaster and log notifiers."""

import asyncio
import json
import logging

import pytest

from flowtap.domain.entities import Notification, NotificationLevel
from flowtap.infrastructure.notifications import (
    CompositeNotifier,
    LoggingNotifier,
    NotificationBroadcaster,
)


def _notification(level=NotificationLevel.SUCCESS, text="Customer created successfully"):
    return Notification(store="customers", level=level, title="Success", description=text)


@pytest.mark.asyncio
async def test_subscriber_receives_notification_event():
    broadcaster = NotificationBroadcaster()
    stream = broadcaster.subscribe()
    pending = asyncio.ensure_future(stream.__anext__())
    await asyncio.sleep(0)
    assert broadcaster.client_count == 1

    broadcaster.notify(_notification())
    event = await pending

    header, data_line, _ = event.split("\n", 2)
    assert header == "event: notification"
    payload = json.loads(data_line.removeprefix("data: "))
    assert payload["store"] == "customers"
    assert payload["level"] == "success"
    assert payload["description"] == "Customer created successfully"

    await broadcaster.shutdown()
    with pytest.raises(StopAsyncIteration):
        await stream.__anext__()
    assert broadcaster.client_count == 0


@pytest.mark.asyncio
async def test_slow_client_is_disconnected():
    broadcaster = NotificationBroadcaster(queue_size=1)
    stream = broadcaster.subscribe()
    pending = asyncio.ensure_future(stream.__anext__())
    await asyncio.sleep(0)

    broadcaster.broadcast("notification", {"n": 1})
    broadcaster.broadcast("notification", {"n": 2})

    assert broadcaster.client_count == 0
    with pytest.raises(StopAsyncIteration):
        await pending


def test_logging_notifier_levels(caplog):
    caplog.set_level(logging.INFO, logger="flowtap.infrastructure.notifications")
    notifier = LoggingNotifier()
    notifier.notify(_notification())
    notifier.notify(_notification(NotificationLevel.FAILURE, "Email already used"))

    levels = [record.levelno for record in caplog.records]
    assert levels == [logging.INFO, logging.WARNING]
    assert "Email already used" in caplog.records[1].getMessage()


def test_composite_notifier_isolates_failures():
    received = []

    class Recording(LoggingNotifier):
        def notify(self, notification):
            received.append(notification)

    class Broken(LoggingNotifier):
        def notify(self, notification):
            raise RuntimeError("down")

    CompositeNotifier(Broken(), Recording()).notify(_notification())
    assert len(received) == 1
