"""Use cases behind the member notification center."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from librarium.domain.entities import Notification
from librarium.domain.exceptions import NotFoundError
from librarium.infrastructure.repositories import NotificationRepository

DEFAULT_NOTIFICATION_LIMIT = 50


@dataclass
class NotificationFeed:
    notifications: list[Notification]
    unread_count: int


def list_notifications(
    session: Session,
    user_id: int,
    *,
    unread_only: bool = False,
    limit: int = DEFAULT_NOTIFICATION_LIMIT,
) -> NotificationFeed:
    """Return the newest notifications of ``user_id`` and the unread total."""

    repository = NotificationRepository(session)
    notifications = repository.list_for_user(user_id, unread_only=unread_only, limit=limit)
    return NotificationFeed(
        notifications=list(notifications),
        unread_count=repository.count_unread(user_id),
    )


def set_notification_read_state(
    session: Session, notification_id: int, *, user_id: int, is_read: bool
) -> Notification:
    updated = NotificationRepository(session).set_read_state(
        notification_id, user_id=user_id, is_read=is_read
    )
    if updated is None:
        raise NotFoundError("Notificación no encontrada")
    return updated


def delete_notification(session: Session, notification_id: int, *, user_id: int) -> None:
    if not NotificationRepository(session).delete(notification_id, user_id=user_id):
        raise NotFoundError("Notificación no encontrada")


def mark_all_notifications_read(session: Session, user_id: int) -> int:
    """Flag every notification owned by ``user_id`` as read.

    Running it again is harmless: rows that are already read are left as they
    are. Returns how many rows changed.
    """

    return NotificationRepository(session).mark_all_as_read(user_id)


def acknowledge_notifications(
    session: Session, notification_ids: Iterable[int], *, user_id: int
) -> None:
    """Mark the ids acknowledged over the websocket as read."""

    ids = [value for value in notification_ids if type(value) is int and value > 0]
    NotificationRepository(session).mark_as_read(ids, user_id=user_id)


__all__ = [
    "DEFAULT_NOTIFICATION_LIMIT",
    "NotificationFeed",
    "acknowledge_notifications",
    "delete_notification",
    "list_notifications",
    "mark_all_notifications_read",
    "set_notification_read_state",
]
