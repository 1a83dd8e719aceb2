"""Tests for hold queue maintenance."""

from __future__ import annotations

from datetime import timedelta

from librarium.application.use_cases.reservations import (
    assign_next_in_queue,
    compact_queue,
    expire_reservations,
)
from librarium.infrastructure.models import NotificationModel, ReservationModel
from librarium.utils import now_in_app_naive_datetime, now_in_app_timezone


def _add_reservation(db_session, *, user_id, book_id, status="active", position=None, expires_at=None):
    reservation = ReservationModel(
        user_id=user_id,
        book_id=book_id,
        status=status,
        queue_position=position,
        expires_at=expires_at,
    )
    db_session.add(reservation)
    db_session.commit()
    return reservation


def test_compact_queue_renumbers_positions(db_session, make_book, make_user) -> None:
    book = make_book()
    ids = [
        _add_reservation(db_session, user_id=make_user().id, book_id=book.id, position=position).id
        for position in (2, 5, 9)
    ]

    compact_queue(db_session, book.id)
    db_session.commit()
    db_session.expire_all()

    positions = [db_session.get(ReservationModel, item).queue_position for item in ids]
    assert positions == [1, 2, 3]


def test_assign_next_skips_when_no_copy_is_free(db_session, make_book, make_user, make_loan) -> None:
    book = make_book()
    make_loan(make_user().id, book.id, due_in_days=3)
    _add_reservation(db_session, user_id=make_user().id, book_id=book.id, position=1)

    assert assign_next_in_queue(db_session, book.id) is None


def test_assign_next_returns_none_for_empty_queue(db_session, make_book) -> None:
    book = make_book()

    assert assign_next_in_queue(db_session, book.id) is None


def test_expire_reservations_moves_queue_forward(db_session, make_book, make_user) -> None:
    book = make_book()
    holder, waiting = make_user(), make_user()
    expired_hold = _add_reservation(
        db_session,
        user_id=holder.id,
        book_id=book.id,
        status="fulfilled",
        expires_at=now_in_app_naive_datetime() - timedelta(hours=1),
    )
    next_in_line = _add_reservation(db_session, user_id=waiting.id, book_id=book.id, position=1)

    expired = expire_reservations(db_session)

    assert [item.id for item in expired] == [expired_hold.id]
    db_session.expire_all()
    assert db_session.get(ReservationModel, expired_hold.id).status == "expired"
    promoted = db_session.get(ReservationModel, next_in_line.id)
    assert promoted.status == "fulfilled"
    assert promoted.queue_position is None
    assert db_session.query(NotificationModel).filter_by(user_id=waiting.id).count() == 1


def test_expire_reservations_keeps_holds_still_in_window(db_session, make_book, make_user) -> None:
    book = make_book()
    hold = _add_reservation(
        db_session,
        user_id=make_user().id,
        book_id=book.id,
        status="fulfilled",
        expires_at=now_in_app_naive_datetime() + timedelta(hours=5),
    )

    assert expire_reservations(db_session) == []
    later = expire_reservations(db_session, reference=now_in_app_timezone() + timedelta(hours=6))

    assert [item.id for item in later] == [hold.id]
