"""Tests for the catalog and availability endpoints."""

from __future__ import annotations

import pytest
from sqlalchemy import event

from librarium.infrastructure.models import ReservationModel


@pytest.fixture()
def statement_counter(database):
    """Count SQL statements sent to the database while the test runs."""

    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(database.engine, "before_cursor_execute", _record)
    yield statements
    event.remove(database.engine, "before_cursor_execute", _record)


@pytest.mark.parametrize("raw_id", ["abc", "0", "-3", "1.5", "٣"])
def test_availability_rejects_malformed_id_without_querying(
    client, statement_counter, raw_id
) -> None:
    response = client.get(f"/api/books/{raw_id}/availability")

    assert response.status_code == 400
    assert response.json()["detail"] == "ID de libro inválido"
    assert statement_counter == []


def test_availability_of_missing_book_is_not_found(client) -> None:
    response = client.get("/api/books/42/availability")

    assert response.status_code == 404
    assert response.json()["detail"] == "Libro no encontrado"


def test_availability_reports_copies_and_queue(client, db_session, make_book, make_user) -> None:
    book = make_book(copies=2)
    members = [make_user(), make_user(), make_user()]
    for position, member in enumerate(members[:2], start=1):
        db_session.add(
            ReservationModel(
                user_id=member.id, book_id=book.id, status="active", queue_position=position
            )
        )
    db_session.add(
        ReservationModel(user_id=members[2].id, book_id=book.id, status="cancelled")
    )
    db_session.commit()

    response = client.get(f"/api/books/{book.id}/availability")

    assert response.status_code == 200
    assert response.json() == {
        "available": True,
        "available_copies": 2,
        "total_copies": 2,
        "queue_length": 2,
    }


def test_availability_when_every_copy_is_out(client, make_book, make_user, make_loan) -> None:
    book = make_book(copies=1)
    make_loan(make_user().id, book.id, due_in_days=7)

    body = client.get(f"/api/books/{book.id}/availability").json()

    assert body["available"] is False
    assert body["available_copies"] == 0
    assert body["total_copies"] == 1


def test_list_books_searches_title_and_author(client, make_book) -> None:
    make_book("Rayuela", author="Julio Cortázar")
    make_book("Ficciones", author="Jorge Luis Borges")
    make_book("El Aleph", author="Jorge Luis Borges")

    response = client.get("/api/books", params={"q": "borges", "limit": 1})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["total_pages"] == 2
    assert [book["title"] for book in body["books"]] == ["El Aleph"]


def test_read_book_detail(client, make_book) -> None:
    book = make_book("Pedro Páramo", author="Juan Rulfo", isbn="9788437604183")

    response = client.get(f"/api/books/{book.id}")

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Pedro Páramo"
    assert body["author_name"] == "Juan Rulfo"
    assert body["category_name"] == "Novela"
    assert client.get("/api/books/999").status_code == 404
    assert client.get("/api/books/uno").status_code == 400


def test_staff_creates_book_with_copies(client, make_user, headers_for) -> None:
    staff = make_user("staff")
    payload = {"title": "La tregua", "copies": 3, "author_name": "Mario Benedetti"}

    response = client.post("/api/admin/books", json=payload, headers=headers_for(staff))

    assert response.status_code == 201
    body = response.json()
    assert body["total_copies"] == 3
    assert body["available_copies"] == 3
    assert body["author_name"] == "Mario Benedetti"


def test_member_cannot_create_books(client, make_user, headers_for) -> None:
    member = make_user()

    response = client.post(
        "/api/admin/books", json={"title": "La tregua"}, headers=headers_for(member)
    )

    assert response.status_code == 401


def test_duplicate_isbn_is_rejected(client, make_book, make_user, headers_for) -> None:
    make_book("Original", isbn="123")
    staff = make_user("admin")

    response = client.post(
        "/api/admin/books",
        json={"title": "Copia", "isbn": "123"},
        headers=headers_for(staff),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Ya existe un libro con ese ISBN"
