"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from librarium.domain.entities import Notification
from librarium.infrastructure.models import NotificationModel
from librarium.utils import ensure_app_naive_datetime, ensure_app_timezone


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: int,
        *,
        unread_only: bool = False,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.user_id == user_id)
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        return self.list_for_user(user_id, unread_only=True, limit=limit)

    def count_unread(self, user_id: int) -> int:
        count = (
            self.session.query(func.count(NotificationModel.id))
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .scalar()
        )
        return int(count or 0)

    def create(self, notification: Notification, *, commit: bool = True) -> Notification:
        model = NotificationModel(
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            link=notification.link,
            payload=notification.payload or {},
            is_read=notification.is_read,
        )
        if notification.created_at is not None:
            model.created_at = ensure_app_naive_datetime(notification.created_at)
        self.session.add(model)
        if commit:
            self.session.commit()
            self.session.refresh(model)
        else:
            self.session.flush()
        return self._to_entity(model)

    def set_read_state(
        self, notification_id: int, *, user_id: int, is_read: bool
    ) -> Notification | None:
        """Update the read flag of a notification owned by ``user_id``."""

        model = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .first()
        )
        if model is None:
            return None
        model.is_read = is_read
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> None:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return
        self.session.query(NotificationModel).filter(
            NotificationModel.id.in_(ids),
            NotificationModel.user_id == user_id,
        ).update({NotificationModel.is_read: True}, synchronize_session=False)
        self.session.commit()

    def mark_all_as_read(self, user_id: int) -> int:
        """Flag every notification of ``user_id`` as read; return rows touched."""

        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update({NotificationModel.is_read: True}, synchronize_session=False)
        )
        self.session.commit()
        return int(updated or 0)

    def delete(self, notification_id: int, *, user_id: int) -> bool:
        deleted = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            message=model.message,
            link=model.link,
            payload=dict(model.payload or {}),
            is_read=bool(model.is_read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
