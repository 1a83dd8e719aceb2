"""Persistence helpers for reservations and the per-book hold queue."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from librarium.domain.entities import (
    RESERVATION_STATUS_ACTIVE,
    RESERVATION_STATUS_FULFILLED,
    Book,
    Reservation,
)
from librarium.infrastructure.models import BookModel, ReservationModel
from librarium.utils import ensure_app_naive_datetime, ensure_app_timezone

from .book_repository import BookRepository


class ReservationRepository:
    """Provide CRUD operations for :class:`Reservation` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, reservation_id: int) -> Reservation | None:
        model = self.session.get(ReservationModel, reservation_id)
        return self._to_entity(model) if model else None

    def get_with_book(self, reservation_id: int) -> tuple[Reservation, Book | None] | None:
        row = (
            self.session.query(ReservationModel, BookModel)
            .outerjoin(BookModel, ReservationModel.book_id == BookModel.id)
            .filter(ReservationModel.id == reservation_id)
            .first()
        )
        if row is None:
            return None
        reservation_model, book_model = row
        book = BookRepository._to_entity(book_model) if book_model else None
        return self._to_entity(reservation_model), book

    def find_active(self, *, user_id: int, book_id: int) -> Reservation | None:
        model = (
            self.session.query(ReservationModel)
            .filter(
                ReservationModel.user_id == user_id,
                ReservationModel.book_id == book_id,
                ReservationModel.status == RESERVATION_STATUS_ACTIVE,
            )
            .first()
        )
        return self._to_entity(model) if model else None

    def count_active(self, book_id: int) -> int:
        count = (
            self.session.query(func.count(ReservationModel.id))
            .filter(
                ReservationModel.book_id == book_id,
                ReservationModel.status == RESERVATION_STATUS_ACTIVE,
            )
            .scalar()
        )
        return int(count or 0)

    def list_active_queue(self, book_id: int) -> Sequence[Reservation]:
        """Return active reservations for ``book_id`` in queue order."""

        models = (
            self.session.query(ReservationModel)
            .filter(
                ReservationModel.book_id == book_id,
                ReservationModel.status == RESERVATION_STATUS_ACTIVE,
            )
            .order_by(
                ReservationModel.queue_position.asc(),
                ReservationModel.reserved_at.asc(),
                ReservationModel.id.asc(),
            )
            .all()
        )
        return [self._to_entity(model) for model in models]

    def list_for_user(
        self,
        user_id: int,
        *,
        status: str | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> tuple[list[tuple[Reservation, Book | None]], int]:
        """Return one page of ``user_id`` reservations with their books, plus the total."""

        filters = [ReservationModel.user_id == user_id]
        if status is not None:
            filters.append(ReservationModel.status == status)
        total = (
            self.session.query(func.count(ReservationModel.id)).filter(*filters).scalar()
            or 0
        )

        paged = (
            self.session.query(ReservationModel, BookModel)
            .outerjoin(BookModel, ReservationModel.book_id == BookModel.id)
            .filter(*filters)
            .order_by(ReservationModel.reserved_at.desc(), ReservationModel.id.desc())
            .offset(skip)
        )
        if limit is not None:
            paged = paged.limit(limit)
        rows = [
            (
                self._to_entity(reservation_model),
                BookRepository._to_entity(book_model) if book_model else None,
            )
            for reservation_model, book_model in paged.all()
        ]
        return rows, int(total)

    def list_expired(self, reference: datetime) -> Sequence[Reservation]:
        """Return fulfilled reservations whose hold ended before ``reference``."""

        cutoff = ensure_app_naive_datetime(reference)
        models = (
            self.session.query(ReservationModel)
            .filter(
                ReservationModel.status == RESERVATION_STATUS_FULFILLED,
                ReservationModel.expires_at.isnot(None),
                ReservationModel.expires_at < cutoff,
            )
            .order_by(ReservationModel.expires_at.asc())
            .all()
        )
        return [self._to_entity(model) for model in models]

    def create(self, reservation: Reservation) -> Reservation:
        model = ReservationModel()
        self._apply_entity_to_model(model, reservation)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def update(self, reservation: Reservation) -> Reservation:
        if reservation.id is None:
            raise ValueError("Reservation id is required for updates")
        model = self.session.get(ReservationModel, reservation.id)
        if model is None:
            msg = f"Reservation with id {reservation.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, reservation)
        self.session.flush()
        return self._to_entity(model)

    def set_queue_position(self, reservation_id: int, position: int) -> None:
        self.session.query(ReservationModel).filter(
            ReservationModel.id == reservation_id
        ).update({ReservationModel.queue_position: position}, synchronize_session=False)

    @staticmethod
    def _apply_entity_to_model(model: ReservationModel, reservation: Reservation) -> None:
        model.user_id = reservation.user_id
        model.book_id = reservation.book_id
        model.status = reservation.status
        model.queue_position = reservation.queue_position
        if reservation.reserved_at is not None:
            model.reserved_at = ensure_app_naive_datetime(reservation.reserved_at)
        model.notified_at = ensure_app_naive_datetime(reservation.notified_at)
        model.fulfilled_at = ensure_app_naive_datetime(reservation.fulfilled_at)
        model.expires_at = ensure_app_naive_datetime(reservation.expires_at)

    @staticmethod
    def _to_entity(model: ReservationModel) -> Reservation:
        return Reservation(
            id=model.id,
            user_id=model.user_id,
            book_id=model.book_id,
            status=model.status,
            queue_position=model.queue_position,
            reserved_at=ensure_app_timezone(model.reserved_at),
            notified_at=ensure_app_timezone(model.notified_at),
            fulfilled_at=ensure_app_timezone(model.fulfilled_at),
            expires_at=ensure_app_timezone(model.expires_at),
        )


__all__ = ["ReservationRepository"]
