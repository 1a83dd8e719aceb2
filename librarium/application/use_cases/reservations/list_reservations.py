"""Use cases for reading reservations."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from librarium.domain.entities import RESERVATION_STATUSES, Book, Reservation, User
from librarium.domain.exceptions import NotFoundError, PermissionDeniedError
from librarium.infrastructure.repositories import ReservationRepository


@dataclass
class ReservationPage:
    items: list[tuple[Reservation, Book | None]]
    total: int
    page: int
    limit: int


def list_user_reservations(
    session: Session,
    user_id: int,
    *,
    status: str | None = None,
    page: int = 1,
    limit: int = 20,
) -> ReservationPage:
    if status is not None and status not in RESERVATION_STATUSES:
        raise ValueError("Estado de reserva inválido")

    items, total = ReservationRepository(session).list_for_user(
        user_id, status=status, skip=(page - 1) * limit, limit=limit
    )
    return ReservationPage(items=items, total=total, page=page, limit=limit)


def get_reservation(
    session: Session, reservation_id: int, *, current_user: User
) -> tuple[Reservation, Book | None]:
    """Return a reservation visible to ``current_user`` (owner or staff)."""

    found = ReservationRepository(session).get_with_book(reservation_id)
    if found is None:
        raise NotFoundError("Reserva no encontrada")
    reservation, book = found
    if reservation.user_id != current_user.id and not current_user.can_access_admin():
        raise PermissionDeniedError("No tienes acceso a esta reserva")
    return reservation, book


__all__ = ["ReservationPage", "get_reservation", "list_user_reservations"]
