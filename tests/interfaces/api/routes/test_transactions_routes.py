"""Tests for issuing and returning loans."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from librarium.infrastructure.models import (
    BookCopyModel,
    BookModel,
    FineModel,
    NotificationModel,
    ReservationModel,
)


def _first_copy_id(db_session, book_id: int) -> int:
    copy = (
        db_session.query(BookCopyModel)
        .filter(BookCopyModel.book_id == book_id)
        .order_by(BookCopyModel.copy_number)
        .first()
    )
    return copy.id


def _due_in(days: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def test_staff_issues_available_copy(client, db_session, make_book, make_user, headers_for) -> None:
    book = make_book(copies=2)
    member = make_user()
    staff = make_user("staff")
    copy_id = _first_copy_id(db_session, book.id)

    response = client.post(
        "/api/admin/transactions/issue",
        json={"user_id": member.id, "book_copy_id": copy_id, "due_date": _due_in(14)},
        headers=headers_for(staff),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["user_id"] == member.id
    assert body["issued_by"] == staff.id
    assert body["return_date"] is None
    db_session.expire_all()
    assert db_session.get(BookModel, book.id).available_copies == 1
    assert db_session.get(BookCopyModel, copy_id).status == "borrowed"


def test_borrowed_copy_cannot_be_issued_twice(client, db_session, make_book, make_user, headers_for) -> None:
    book = make_book()
    staff = make_user("staff")
    copy_id = _first_copy_id(db_session, book.id)
    payload = {"book_copy_id": copy_id, "due_date": _due_in(7)}

    first = client.post(
        "/api/admin/transactions/issue",
        json={**payload, "user_id": make_user().id},
        headers=headers_for(staff),
    )
    second = client.post(
        "/api/admin/transactions/issue",
        json={**payload, "user_id": make_user().id},
        headers=headers_for(staff),
    )

    assert first.status_code == 201
    assert second.status_code == 400


def test_member_with_overdue_loan_cannot_borrow(
    client, db_session, make_book, make_user, make_loan, headers_for
) -> None:
    book = make_book(copies=2)
    member = make_user()
    staff = make_user("staff")
    make_loan(member.id, book.id, due_in_days=-1)
    free_copy = (
        db_session.query(BookCopyModel)
        .filter(BookCopyModel.book_id == book.id, BookCopyModel.status == "available")
        .one()
    )

    response = client.post(
        "/api/admin/transactions/issue",
        json={"user_id": member.id, "book_copy_id": free_copy.id, "due_date": _due_in(7)},
        headers=headers_for(staff),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "El usuario tiene libros vencidos y no puede solicitar más"


def test_issue_rejects_expired_membership(client, db_session, make_book, make_user, headers_for) -> None:
    book = make_book()
    member = make_user(membership_expiry=datetime(2000, 1, 1))
    staff = make_user("staff")

    response = client.post(
        "/api/admin/transactions/issue",
        json={
            "user_id": member.id,
            "book_copy_id": _first_copy_id(db_session, book.id),
            "due_date": _due_in(7),
        },
        headers=headers_for(staff),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "La membresía del usuario ha expirado"


def test_issue_unknown_copy_is_not_found(client, make_user, headers_for) -> None:
    staff = make_user("staff")

    response = client.post(
        "/api/admin/transactions/issue",
        json={"user_id": staff.id, "book_copy_id": 999, "due_date": _due_in(7)},
        headers=headers_for(staff),
    )

    assert response.status_code == 404


def test_members_cannot_issue_books(client, db_session, make_book, make_user, headers_for) -> None:
    book = make_book()
    member = make_user()

    response = client.post(
        "/api/admin/transactions/issue",
        json={
            "user_id": member.id,
            "book_copy_id": _first_copy_id(db_session, book.id),
            "due_date": _due_in(7),
        },
        headers=headers_for(member),
    )

    assert response.status_code == 401
    db_session.expire_all()
    assert db_session.get(BookModel, book.id).available_copies == 1


def test_on_time_return_has_no_fine(client, db_session, make_book, make_user, make_loan, headers_for) -> None:
    book = make_book()
    loan = make_loan(make_user().id, book.id, due_in_days=3)
    staff = make_user("staff")

    response = client.post(
        "/api/admin/transactions/return",
        json={"transaction_id": loan.id},
        headers=headers_for(staff),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["fine"] is None
    assert body["overdue_days"] == 0
    assert Decimal(body["fine_amount"]) == Decimal("0")
    assert body["transaction"]["return_date"] is not None
    db_session.expire_all()
    assert db_session.get(BookModel, book.id).available_copies == 1
    assert db_session.query(FineModel).count() == 0


def test_late_return_charges_fine_and_notifies(
    client, db_session, make_book, make_user, make_loan, headers_for
) -> None:
    book = make_book("Rayuela")
    member = make_user()
    loan = make_loan(member.id, book.id, due_in_days=-2.5)
    staff = make_user("staff")

    response = client.post(
        "/api/admin/transactions/return",
        json={"transaction_id": loan.id, "notes": "Tapa dañada"},
        headers=headers_for(staff),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["overdue_days"] == 3
    assert Decimal(body["fine_amount"]) == Decimal("1.50")
    assert Decimal(body["fine"]["amount"]) == Decimal("1.50")
    assert body["fine"]["status"] == "pending"
    assert body["transaction"]["notes"] == "Tapa dañada"

    db_session.expire_all()
    notification = db_session.query(NotificationModel).filter_by(user_id=member.id).one()
    assert notification.type == "fine_added"
    assert notification.payload["fine_id"] == body["fine"]["id"]
    assert "Rayuela" in notification.message


def test_return_twice_is_rejected(client, make_book, make_user, make_loan, headers_for) -> None:
    book = make_book()
    loan = make_loan(make_user().id, book.id, due_in_days=1)
    headers = headers_for(make_user("staff"))

    client.post("/api/admin/transactions/return", json={"transaction_id": loan.id}, headers=headers)
    again = client.post(
        "/api/admin/transactions/return", json={"transaction_id": loan.id}, headers=headers
    )

    assert again.status_code == 400
    assert again.json()["detail"] == "El libro ya fue devuelto"


def test_return_hands_copy_to_first_in_queue(
    client, db_session, make_book, make_user, make_loan, headers_for
) -> None:
    book = make_book()
    borrower, first, second = make_user(), make_user(), make_user()
    loan = make_loan(borrower.id, book.id, due_in_days=2)
    for member in (first, second):
        created = client.post(
            "/api/reservations", json={"book_id": book.id}, headers=headers_for(member)
        )
        assert created.json()["status"] == "active"

    response = client.post(
        "/api/admin/transactions/return",
        json={"transaction_id": loan.id},
        headers=headers_for(make_user("staff")),
    )

    assert response.status_code == 200
    db_session.expire_all()
    reservations = {
        item.user_id: item
        for item in db_session.query(ReservationModel).filter_by(book_id=book.id)
    }
    assert reservations[first.id].status == "fulfilled"
    assert reservations[first.id].queue_position is None
    assert reservations[first.id].expires_at is not None
    assert reservations[second.id].status == "active"
    assert reservations[second.id].queue_position == 1
    ready = db_session.query(NotificationModel).filter_by(user_id=first.id).one()
    assert ready.type == "reservation_ready"


def test_member_lists_borrowed_books(client, make_book, make_user, make_loan, headers_for) -> None:
    member = make_user()
    late_book = make_book("Ficciones")
    current_book = make_book("El túnel")
    make_loan(member.id, late_book.id, due_in_days=-1.5)
    make_loan(member.id, current_book.id, due_in_days=6)
    make_loan(make_user().id, make_book("Otro").id, due_in_days=6)

    response = client.get("/api/member/borrowed", headers=headers_for(member))

    assert response.status_code == 200
    body = response.json()
    assert [item["book"]["title"] for item in body] == ["Ficciones", "El túnel"]
    assert [item["is_overdue"] for item in body] == [True, False]
    assert [item["days_overdue"] for item in body] == [2, 0]
