"""Shared fixtures: a fresh SQLite database and application per test."""

from __future__ import annotations

import os
import tempfile
from datetime import timedelta
from pathlib import Path

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

os.environ["DATABASE_URL"] = f"sqlite:///{Path(tempfile.gettempdir()) / 'librarium_import.db'}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from librarium.config import get_settings, reset_settings_cache  # noqa: E402

reset_settings_cache()

from librarium.domain.entities import ROLE_MEMBER, Book  # noqa: E402
from librarium.infrastructure.models import (  # noqa: E402
    BookCopyModel,
    BookModel,
    NotificationModel,
    RoleModel,
    TransactionModel,
    UserModel,
)
from librarium.infrastructure.repositories import BookRepository  # noqa: E402
from librarium.infrastructure.security import (  # noqa: E402
    create_access_token,
    get_password_hash,
)
from librarium.utils import now_in_app_naive_datetime  # noqa: E402
from main import create_app  # noqa: E402

PASSWORD = "Secret123"


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash the shared test password once; pbkdf2 is deliberately slow."""

    return get_password_hash(PASSWORD)


@pytest.fixture()
def settings(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'librarium.db'}")
    reset_settings_cache()
    yield get_settings()
    reset_settings_cache()


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def database(client):
    return client.app.state.database


@pytest.fixture()
def db_session(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db_session, password_hash):
    """Return a factory inserting users with the given role alias."""

    counter = {"value": 0}

    def _make_user(
        role: str = ROLE_MEMBER,
        *,
        email: str | None = None,
        name: str | None = None,
        is_active: bool = True,
        membership_expiry=None,
        membership_type: str = "standard",
    ) -> UserModel:
        counter["value"] += 1
        role_model = db_session.query(RoleModel).filter(RoleModel.alias == role).one()
        user = UserModel(
            role_id=role_model.id,
            name=name or f"{role.title()} {counter['value']}",
            email=email or f"{role}{counter['value']}@example.com",
            password=password_hash,
            is_active=is_active,
            membership_expiry=membership_expiry,
            membership_type=membership_type,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_book(db_session):
    """Return a factory creating a book with ``copies`` available copies."""

    def _make_book(
        title: str = "Cien años de soledad",
        *,
        copies: int = 1,
        isbn: str | None = None,
        author: str = "Gabriel García Márquez",
    ) -> Book:
        book = Book(
            id=None,
            title=title,
            isbn=isbn,
            author_name=None,
            category_name=None,
            publication_year=1967,
            language="es",
            description=None,
            total_copies=copies,
            available_copies=copies,
            shelf_location="A-1",
        )
        created = BookRepository(db_session).create(
            book, author_name=author, category_name="Novela"
        )
        db_session.commit()
        return created

    return _make_book


@pytest.fixture()
def make_loan(db_session):
    """Return a factory inserting an open loan of the first free copy of a book."""

    def _make_loan(user_id: int, book_id: int, *, due_in_days: float) -> TransactionModel:
        now = now_in_app_naive_datetime()
        copy = (
            db_session.query(BookCopyModel)
            .filter(BookCopyModel.book_id == book_id, BookCopyModel.status == "available")
            .order_by(BookCopyModel.copy_number)
            .first()
        )
        assert copy is not None, "no free copy left"
        copy.status = "borrowed"
        book = db_session.get(BookModel, book_id)
        book.available_copies -= 1
        loan = TransactionModel(
            user_id=user_id,
            book_copy_id=copy.id,
            type="checkout",
            checkout_date=now - timedelta(days=14),
            due_date=now + timedelta(days=due_in_days),
        )
        db_session.add(loan)
        db_session.commit()
        db_session.refresh(loan)
        return loan

    return _make_loan


@pytest.fixture()
def make_notification(db_session):
    def _make_notification(
        user_id: int, *, is_read: bool = False, title: str = "Aviso"
    ) -> NotificationModel:
        notification = NotificationModel(
            user_id=user_id,
            type="general",
            title=title,
            message="Mensaje de prueba",
            payload={},
            is_read=is_read,
        )
        db_session.add(notification)
        db_session.commit()
        db_session.refresh(notification)
        return notification

    return _make_notification


def auth_headers(user: UserModel) -> dict[str, str]:
    token = create_access_token({"sub": user.email, "role": user.role.alias})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def headers_for():
    return auth_headers
