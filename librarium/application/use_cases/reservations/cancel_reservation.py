"""Use case for leaving the hold queue."""

from sqlalchemy.orm import Session

from librarium.domain.entities import RESERVATION_STATUS_CANCELLED, Reservation
from librarium.domain.exceptions import NotFoundError, PermissionDeniedError
from librarium.infrastructure.repositories import (
    ActivityLogRepository,
    ReservationRepository,
)

from .positions import compact_queue
from .queue import try_assign_next_in_queue


def cancel_reservation(session: Session, reservation_id: int, *, user_id: int) -> Reservation:
    """Cancel an active reservation owned by ``user_id`` and close the gap it leaves."""

    repository = ReservationRepository(session)
    reservation = repository.get(reservation_id)
    if reservation is None:
        raise NotFoundError("Reserva no encontrada")
    if reservation.user_id != user_id:
        raise PermissionDeniedError("Solo puedes cancelar tus propias reservas")
    if not reservation.is_active():
        raise ValueError(f"La reserva ya está en estado {reservation.status}")

    reservation.status = RESERVATION_STATUS_CANCELLED
    reservation.queue_position = None
    cancelled = repository.update(reservation)
    compact_queue(session, reservation.book_id)
    ActivityLogRepository(session).record(
        user_id=user_id,
        action="cancel_reservation",
        entity_type="reservation",
        entity_id=reservation_id,
        payload={"book_id": reservation.book_id},
    )
    session.commit()

    try_assign_next_in_queue(session, reservation.book_id)
    return cancelled
