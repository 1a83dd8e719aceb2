"""Utility helpers to push notifications to websocket subscribers."""

from __future__ import annotations

import asyncio
from typing import Any

from anyio import from_thread

from librarium.domain.entities import Notification

from .manager import NotificationConnectionManager, notification_manager


class NotificationPublisher:
    """Serialize notifications and schedule their delivery."""

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager

    def dispatch(self, notification: Notification) -> None:
        """Schedule ``notification`` to be delivered to its user."""

        if self._manager.connection_count(notification.user_id) == 0:
            return

        message = {"type": "notification", "data": serialize_notification(notification)}
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Sync handlers run in a worker thread spawned by the event loop.
            try:
                from_thread.run(self._manager.send_to_user, notification.user_id, message)
            except RuntimeError:
                return
        else:
            loop.create_task(self._manager.send_to_user(notification.user_id, message))


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "link": notification.link,
        "payload": notification.payload or {},
        "is_read": notification.is_read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


notification_publisher = NotificationPublisher(notification_manager)


def dispatch_notification(notification: Notification) -> None:
    """Public helper that delegates to the shared publisher instance."""

    notification_publisher.dispatch(notification)


__all__ = [
    "NotificationPublisher",
    "dispatch_notification",
    "notification_publisher",
    "serialize_notification",
]
