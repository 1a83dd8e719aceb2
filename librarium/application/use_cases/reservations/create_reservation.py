"""Use case for joining the hold queue of a book."""

from sqlalchemy.orm import Session

from librarium.domain.entities import RESERVATION_STATUS_ACTIVE, Reservation
from librarium.domain.exceptions import NotFoundError
from librarium.infrastructure.repositories import (
    ActivityLogRepository,
    BookRepository,
    ReservationRepository,
)
from librarium.utils import now_in_app_timezone

from .queue import try_assign_next_in_queue


def create_reservation(session: Session, *, user_id: int, book_id: int) -> Reservation:
    """Place ``user_id`` at the end of the queue for ``book_id``."""

    book = BookRepository(session).get(book_id)
    if book is None:
        raise NotFoundError("Libro no encontrado")

    repository = ReservationRepository(session)
    if repository.find_active(user_id=user_id, book_id=book_id):
        raise ValueError("Ya tienes una reserva activa para este libro")

    queue_position = repository.count_active(book_id) + 1
    reservation = repository.create(
        Reservation(
            id=None,
            user_id=user_id,
            book_id=book_id,
            status=RESERVATION_STATUS_ACTIVE,
            queue_position=queue_position,
            reserved_at=now_in_app_timezone(),
        )
    )
    ActivityLogRepository(session).record(
        user_id=user_id,
        action="create_reservation",
        entity_type="reservation",
        entity_id=reservation.id,
        payload={"book_id": book_id, "queue_position": queue_position},
    )
    session.commit()

    if book.available_copies > 0 and queue_position == 1:
        assigned = try_assign_next_in_queue(session, book_id)
        if assigned is not None and assigned.id == reservation.id:
            return assigned
    return reservation
