"""Queue position bookkeeping shared by the reservation use cases."""

from sqlalchemy.orm import Session

from librarium.infrastructure.repositories import ReservationRepository


def compact_queue(session: Session, book_id: int) -> None:
    """Renumber the active reservations of ``book_id`` as 1..n (not committed)."""

    repository = ReservationRepository(session)
    for position, reservation in enumerate(repository.list_active_queue(book_id), start=1):
        if reservation.queue_position != position:
            repository.set_queue_position(reservation.id, position)
