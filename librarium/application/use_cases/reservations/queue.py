"""Hold queue maintenance: assigning the next member in line and expiring holds."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from librarium.domain.entities import RESERVATION_STATUS_EXPIRED, Reservation
from librarium.infrastructure.repositories import (
    ActivityLogRepository,
    BookRepository,
    ReservationRepository,
)
from librarium.utils import now_in_app_timezone

from .fulfill_reservation import (
    announce_reservation_ready,
    stage_reservation_ready_for_pickup,
)

logger = logging.getLogger(__name__)


def assign_next_in_queue(session: Session, book_id: int) -> Reservation | None:
    """Fulfil the first reservation in line when ``book_id`` has a free copy.

    Returns ``None`` when nobody is waiting or no copy is available.
    """

    queue = ReservationRepository(session).list_active_queue(book_id)
    if not queue:
        return None

    book = BookRepository(session).get(book_id)
    if book is None or book.available_copies < 1:
        return None

    updated, notification = stage_reservation_ready_for_pickup(
        session,
        queue[0],
        book,
        actor_id=None,
        action="auto_assign_reservation",
    )
    session.commit()
    announce_reservation_ready(session, updated, book, notification)
    return updated


def try_assign_next_in_queue(session: Session, book_id: int) -> Reservation | None:
    """Run :func:`assign_next_in_queue`, logging database failures instead of raising.

    Used after an operation that already committed, whose outcome must not
    depend on the queue.
    """

    try:
        return assign_next_in_queue(session, book_id)
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Failed to assign next reservation in queue for book %s", book_id)
        return None


def expire_reservations(
    session: Session, *, reference: datetime | None = None
) -> list[Reservation]:
    """Expire fulfilled reservations whose pickup window has closed."""

    now = reference or now_in_app_timezone()
    repository = ReservationRepository(session)
    expired: list[Reservation] = []

    for reservation in repository.list_expired(now):
        try:
            reservation.status = RESERVATION_STATUS_EXPIRED
            updated = repository.update(reservation)
            ActivityLogRepository(session).record(
                user_id=None,
                action="expire_reservation",
                entity_type="reservation",
                entity_id=reservation.id,
                payload={"book_id": reservation.book_id, "user_id": reservation.user_id},
            )
            session.commit()
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Error expiring reservation %s", reservation.id)
            continue

        logger.info("Reservation %s expired", reservation.id)
        expired.append(updated)
        try_assign_next_in_queue(session, reservation.book_id)

    return expired


__all__ = [
    "assign_next_in_queue",
    "expire_reservations",
    "try_assign_next_in_queue",
]
