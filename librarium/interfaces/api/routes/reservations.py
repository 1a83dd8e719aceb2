"""Rutas para la cola de reservas de libros."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from librarium.application.use_cases.reservations import (
    cancel_reservation as cancel_reservation_uc,
    create_reservation as create_reservation_uc,
    fulfill_reservation as fulfill_reservation_uc,
    get_reservation as get_reservation_uc,
    list_user_reservations,
)
from librarium.domain.entities import Book, Reservation, User
from librarium.infrastructure.database import get_db
from librarium.infrastructure.repositories import BookRepository
from librarium.interfaces.api.dependencies import get_current_active_user, require_staff
from librarium.interfaces.api.routes_helpers import parse_identifier, to_http_exception
from librarium.interfaces.api.schemas import (
    BookRead,
    ReservationCreate,
    ReservationListResponse,
    ReservationRead,
)

INVALID_RESERVATION_ID = "ID de reserva inválido"

router = APIRouter(prefix="/reservations", tags=["reservations"])
admin_router = APIRouter(prefix="/admin/reservations", tags=["reservations"])


def _to_read_model(reservation: Reservation, book: Book | None = None) -> ReservationRead:
    return ReservationRead(
        id=reservation.id,
        user_id=reservation.user_id,
        book_id=reservation.book_id,
        status=reservation.status,
        queue_position=reservation.queue_position,
        reserved_at=reservation.reserved_at,
        notified_at=reservation.notified_at,
        fulfilled_at=reservation.fulfilled_at,
        expires_at=reservation.expires_at,
        book=BookRead.model_validate(book) if book else None,
    )


@router.post("", response_model=ReservationRead, status_code=status.HTTP_201_CREATED)
def create_reservation(
    payload: ReservationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Agrega al usuario autenticado a la cola de reservas del libro."""

    try:
        reservation = create_reservation_uc(
            db, user_id=current_user.id, book_id=payload.book_id
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(reservation, BookRepository(db).get(reservation.book_id))


@router.get("", response_model=ReservationListResponse)
def list_reservations(
    status_filter: str | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Lista las reservas del usuario autenticado."""

    try:
        result = list_user_reservations(
            db, current_user.id, status=status_filter, page=page, limit=limit
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ReservationListResponse(
        reservations=[_to_read_model(reservation, book) for reservation, book in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
    )


@router.get("/{reservation_id}", response_model=ReservationRead)
def read_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Obtiene una reserva propia (el personal puede ver cualquiera)."""

    identifier = parse_identifier(reservation_id, INVALID_RESERVATION_ID)
    try:
        reservation, book = get_reservation_uc(db, identifier, current_user=current_user)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(reservation, book)


@router.delete("/{reservation_id}", response_model=ReservationRead)
def cancel_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Cancela una reserva activa del usuario autenticado."""

    identifier = parse_identifier(reservation_id, INVALID_RESERVATION_ID)
    try:
        reservation = cancel_reservation_uc(db, identifier, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(reservation)


@admin_router.post("/{reservation_id}/fulfill", response_model=ReservationRead)
def fulfill_reservation(
    reservation_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Marca la reserva como lista para recoger y avisa al socio."""

    identifier = parse_identifier(reservation_id, INVALID_RESERVATION_ID)
    try:
        reservation = fulfill_reservation_uc(db, identifier, fulfilled_by=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _to_read_model(reservation)
