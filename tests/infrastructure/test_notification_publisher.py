"""Tests for the websocket notification publisher."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from librarium.domain.entities import Notification
from librarium.infrastructure.notifications import (
    NotificationConnectionManager,
    NotificationPublisher,
    serialize_notification,
)


class _FakeWebSocket:
    def __init__(self, *, broken: bool = False) -> None:
        self.accepted = False
        self.broken = broken
        self.messages: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.broken:
            raise RuntimeError("socket closed")
        self.messages.append(message)


def _notification(user_id: int = 7) -> Notification:
    return Notification(
        id=3,
        user_id=user_id,
        type="fine_added",
        title="Multa registrada",
        message="Se registró una multa",
        link="/member/fines",
        payload={"amount": "1.50"},
        is_read=False,
        created_at=datetime(2024, 1, 2, 3, 4, tzinfo=timezone.utc),
    )


def test_serialize_notification() -> None:
    data = serialize_notification(_notification())

    assert data["id"] == 3
    assert data["type"] == "fine_added"
    assert data["payload"] == {"amount": "1.50"}
    assert data["created_at"] == "2024-01-02T03:04:00+00:00"


def test_dispatch_without_subscribers_is_a_no_op() -> None:
    manager = NotificationConnectionManager()

    NotificationPublisher(manager).dispatch(_notification())

    assert manager.connection_count(7) == 0


def test_dispatch_delivers_to_every_connection_of_the_user() -> None:
    manager = NotificationConnectionManager()
    first, second, stranger = _FakeWebSocket(), _FakeWebSocket(), _FakeWebSocket()

    async def scenario() -> None:
        await manager.connect(7, first)
        await manager.connect(7, second)
        await manager.connect(8, stranger)
        NotificationPublisher(manager).dispatch(_notification(7))
        await asyncio.sleep(0)

    asyncio.run(scenario())

    assert first.accepted and second.accepted
    assert [message["type"] for message in first.messages] == ["notification"]
    assert second.messages[0]["data"]["title"] == "Multa registrada"
    assert stranger.messages == []


def test_stale_connections_are_dropped() -> None:
    manager = NotificationConnectionManager()
    healthy, broken = _FakeWebSocket(), _FakeWebSocket(broken=True)

    async def scenario() -> None:
        await manager.connect(7, healthy)
        await manager.connect(7, broken)
        await manager.send_to_user(7, {"type": "notification"})

    asyncio.run(scenario())

    assert manager.connection_count(7) == 1
    assert healthy.messages == [{"type": "notification"}]


def test_disconnect_forgets_user_without_connections() -> None:
    manager = NotificationConnectionManager()
    socket = _FakeWebSocket()

    asyncio.run(manager.connect(7, socket))
    manager.disconnect(7, socket)
    manager.disconnect(7, socket)

    assert manager.connection_count(7) == 0
