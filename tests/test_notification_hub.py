"""
Tests for the in-process notification hub.
"""
import asyncio
import json

import pytest

from app.services.notification import NotificationHub


class FakeWebSocket:
    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def send_text(self, message: str) -> None:
        if self.fail:
            raise ConnectionError("socket closed")
        self.sent.append(message)


@pytest.fixture
def loop():
    event_loop = asyncio.new_event_loop()
    yield event_loop
    if not event_loop.is_closed():
        event_loop.close()


def drain(loop):
    loop.run_until_complete(asyncio.sleep(0.05))


def test_register_and_unregister(loop):
    hub = NotificationHub()
    first = hub.register("u1", FakeWebSocket(), loop=loop)
    hub.register("u1", FakeWebSocket(), loop=loop)
    hub.register("u2", FakeWebSocket(), loop=loop)

    assert hub.connection_count("u1") == 2
    assert hub.connection_count() == 3

    hub.unregister(first)
    hub.unregister(first)
    assert hub.connection_count("u1") == 1


def test_publish_reaches_only_targets(loop):
    hub = NotificationHub()
    target, bystander = FakeWebSocket(), FakeWebSocket()
    hub.register("u1", target, loop=loop)
    hub.register("u2", bystander, loop=loop)

    scheduled = hub.publish(["u1", "u1", "nobody"], {"type": "notification", "title": "Hi"})
    drain(loop)

    assert scheduled == 1
    assert [json.loads(m)["title"] for m in target.sent] == ["Hi"]
    assert bystander.sent == []


def test_failed_send_is_swallowed(loop):
    hub = NotificationHub()
    hub.register("u1", FakeWebSocket(fail=True), loop=loop)
    healthy = FakeWebSocket()
    hub.register("u1", healthy, loop=loop)

    assert hub.publish(["u1"], {"title": "Hi"}) == 2
    drain(loop)

    assert len(healthy.sent) == 1


def test_closed_loop_drops_channel(loop):
    hub = NotificationHub()
    hub.register("u1", FakeWebSocket(), loop=loop)
    loop.close()

    assert hub.publish(["u1"], {"title": "Hi"}) == 0
    assert hub.connection_count("u1") == 0
