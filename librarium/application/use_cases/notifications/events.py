"""Helpers to build, persist and push member notifications."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from librarium.domain.entities import (
    NOTIFICATION_FINE_ADDED,
    NOTIFICATION_GENERAL,
    NOTIFICATION_OVERDUE,
    NOTIFICATION_RESERVATION_READY,
    Book,
    Notification,
)
from librarium.infrastructure.notifications import dispatch_notification
from librarium.infrastructure.repositories import NotificationRepository
from librarium.utils import now_in_app_timezone


def stage_notification(
    session: Session,
    *,
    user_id: int,
    notification_type: str,
    title: str,
    message: str,
    link: str | None = None,
    payload: dict[str, Any] | None = None,
) -> Notification:
    """Add a notification to the current transaction without committing it.

    Callers publish the returned entity with :func:`publish_notifications`
    once their transaction has been committed.
    """

    notification = Notification(
        id=None,
        user_id=user_id,
        type=notification_type,
        title=title,
        message=message,
        link=link,
        payload=payload or {},
        is_read=False,
        created_at=now_in_app_timezone(),
    )
    return NotificationRepository(session).create(notification, commit=False)


def publish_notifications(notifications: Iterable[Notification]) -> None:
    for notification in notifications:
        dispatch_notification(notification)


def create_notification(
    session: Session,
    *,
    user_id: int,
    title: str,
    message: str,
    notification_type: str = NOTIFICATION_GENERAL,
    link: str | None = None,
    payload: dict[str, Any] | None = None,
) -> Notification:
    """Persist a notification in its own transaction and push it."""

    notification = Notification(
        id=None,
        user_id=user_id,
        type=notification_type,
        title=title,
        message=message,
        link=link,
        payload=payload or {},
        is_read=False,
        created_at=now_in_app_timezone(),
    )
    saved = NotificationRepository(session).create(notification)
    dispatch_notification(saved)
    return saved


def stage_fine_added(
    session: Session,
    *,
    user_id: int,
    fine_id: int | None,
    amount: Decimal,
    days_overdue: int,
    book: Book | None,
) -> Notification:
    title = book.title if book else "un libro"
    return stage_notification(
        session,
        user_id=user_id,
        notification_type=NOTIFICATION_FINE_ADDED,
        title="Multa registrada",
        message=(
            f"Se registró una multa de {amount:.2f} por devolver «{title}» "
            f"con {days_overdue} día(s) de retraso."
        ),
        link="/member/fines",
        payload={
            "fine_id": fine_id,
            "amount": str(amount),
            "days_overdue": days_overdue,
            "book_id": book.id if book else None,
        },
    )


def stage_reservation_ready(
    session: Session,
    *,
    user_id: int,
    reservation_id: int,
    book: Book | None,
    expires_at: datetime,
) -> Notification:
    title = book.title if book else "El libro reservado"
    return stage_notification(
        session,
        user_id=user_id,
        notification_type=NOTIFICATION_RESERVATION_READY,
        title="Reserva lista para recoger",
        message=(
            f"«{title}» está disponible. Recógelo antes del "
            f"{expires_at:%d/%m/%Y %H:%M}."
        ),
        link="/member/reservations",
        payload={
            "reservation_id": reservation_id,
            "book_id": book.id if book else None,
            "expires_at": expires_at.isoformat(),
        },
    )


def stage_overdue_reminder(
    session: Session,
    *,
    user_id: int,
    transaction_id: int,
    book: Book | None,
    days_overdue: int,
) -> Notification:
    title = book.title if book else "un libro"
    return stage_notification(
        session,
        user_id=user_id,
        notification_type=NOTIFICATION_OVERDUE,
        title="Préstamo vencido",
        message=f"«{title}» tiene {days_overdue} día(s) de retraso. Devuélvelo cuanto antes.",
        link="/member/borrowed",
        payload={
            "transaction_id": transaction_id,
            "book_id": book.id if book else None,
            "days_overdue": days_overdue,
        },
    )


__all__ = [
    "create_notification",
    "publish_notifications",
    "stage_fine_added",
    "stage_notification",
    "stage_overdue_reminder",
    "stage_reservation_ready",
]
