"""Use case for marking a reservation ready for pickup."""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from librarium.config import get_settings
from librarium.domain.entities import (
    RESERVATION_STATUS_FULFILLED,
    Book,
    Notification,
    Reservation,
)
from librarium.domain.exceptions import NotFoundError
from librarium.infrastructure.email import send_reservation_ready_email
from librarium.infrastructure.repositories import (
    ActivityLogRepository,
    ReservationRepository,
    UserRepository,
)
from librarium.utils import now_in_app_timezone

from ..notifications import publish_notifications, stage_reservation_ready
from .positions import compact_queue

logger = logging.getLogger(__name__)


def stage_reservation_ready_for_pickup(
    session: Session,
    reservation: Reservation,
    book: Book | None,
    *,
    actor_id: int | None,
    action: str,
) -> tuple[Reservation, Notification]:
    """Flag ``reservation`` as fulfilled and stage its notification and log entry."""

    now = now_in_app_timezone()
    reservation.status = RESERVATION_STATUS_FULFILLED
    reservation.fulfilled_at = now
    reservation.notified_at = now
    reservation.expires_at = now + timedelta(hours=get_settings().hold_expiry_hours)
    reservation.queue_position = None
    updated = ReservationRepository(session).update(reservation)
    compact_queue(session, updated.book_id)

    notification = stage_reservation_ready(
        session,
        user_id=updated.user_id,
        reservation_id=updated.id,
        book=book,
        expires_at=updated.expires_at,
    )
    ActivityLogRepository(session).record(
        user_id=actor_id,
        action=action,
        entity_type="reservation",
        entity_id=updated.id,
        payload={"book_id": updated.book_id, "user_id": updated.user_id},
    )
    return updated, notification


def announce_reservation_ready(
    session: Session,
    reservation: Reservation,
    book: Book | None,
    notification: Notification,
) -> None:
    """Push the staged notification and email the member once committed."""

    publish_notifications([notification])
    member = UserRepository(session).get(reservation.user_id)
    if member is None or reservation.expires_at is None:
        return
    sent = send_reservation_ready_email(
        member.email,
        name=member.name,
        book_title=book.title if book else "",
        expires_at=reservation.expires_at,
    )
    if not sent:
        logger.info("Reservation %s ready email was not delivered", reservation.id)


def fulfill_reservation(
    session: Session, reservation_id: int, *, fulfilled_by: int | None
) -> Reservation:
    """Staff action: the reserved book is set aside for the member."""

    repository = ReservationRepository(session)
    found = repository.get_with_book(reservation_id)
    if found is None:
        raise NotFoundError("Reserva no encontrada")
    reservation, book = found
    if not reservation.is_active():
        raise ValueError("Solo se pueden completar reservas activas")

    updated, notification = stage_reservation_ready_for_pickup(
        session,
        reservation,
        book,
        actor_id=fulfilled_by,
        action="fulfill_reservation",
    )
    session.commit()
    announce_reservation_ready(session, updated, book, notification)
    return updated


__all__ = [
    "announce_reservation_ready",
    "fulfill_reservation",
    "stage_reservation_ready_for_pickup",
]
