"""Persistence helpers for loan transactions."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from librarium.domain.entities import Book, BookCopy, Transaction, User
from librarium.infrastructure.models import (
    BookCopyModel,
    BookModel,
    TransactionModel,
    UserModel,
)
from librarium.utils import ensure_app_naive_datetime, ensure_app_timezone

from .book_repository import BookRepository
from .user_repository import UserRepository

LoanRow = tuple[Transaction, User | None, BookCopy | None, Book | None]


class TransactionRepository:
    """Provide CRUD operations and loan queries for :class:`Transaction`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, transaction_id: int) -> Transaction | None:
        model = self.session.get(TransactionModel, transaction_id)
        return self._to_entity(model) if model else None

    def create(self, transaction: Transaction) -> Transaction:
        """Stage ``transaction`` and flush it so the identifier is assigned."""

        model = TransactionModel()
        self._apply_entity_to_model(model, transaction)
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def update(self, transaction: Transaction) -> Transaction:
        if transaction.id is None:
            raise ValueError("Transaction id is required for updates")
        model = self.session.get(TransactionModel, transaction.id)
        if model is None:
            msg = f"Transaction with id {transaction.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, transaction)
        self.session.flush()
        return self._to_entity(model)

    def list_open_for_user(self, user_id: int) -> Sequence[Transaction]:
        models = (
            self.session.query(TransactionModel)
            .filter(TransactionModel.user_id == user_id)
            .filter(TransactionModel.return_date.is_(None))
            .all()
        )
        return [self._to_entity(model) for model in models]

    def list_active_with_books(self, user_id: int) -> list[LoanRow]:
        """Return the open loans of ``user_id`` joined with copy and book."""

        query = self._joined_query().filter(
            TransactionModel.user_id == user_id,
            TransactionModel.return_date.is_(None),
        )
        return [self._row_to_entities(row) for row in query.order_by(TransactionModel.due_date).all()]

    def list_overdue(self, reference: datetime) -> list[LoanRow]:
        """Return unreturned loans whose due date is before ``reference``."""

        cutoff = ensure_app_naive_datetime(reference)
        query = self._joined_query().filter(
            TransactionModel.return_date.is_(None),
            TransactionModel.due_date.isnot(None),
            TransactionModel.due_date < cutoff,
        )
        rows = query.order_by(TransactionModel.due_date, TransactionModel.id).all()
        return [self._row_to_entities(row) for row in rows]

    def has_user_borrowed_book(self, user_id: int, book_id: int) -> bool:
        match = (
            self.session.query(TransactionModel.id)
            .join(BookCopyModel, TransactionModel.book_copy_id == BookCopyModel.id)
            .filter(
                TransactionModel.user_id == user_id,
                BookCopyModel.book_id == book_id,
                TransactionModel.checkout_date.isnot(None),
            )
            .first()
        )
        return match is not None

    def _joined_query(self):
        return (
            self.session.query(TransactionModel, UserModel, BookCopyModel, BookModel)
            .outerjoin(UserModel, TransactionModel.user_id == UserModel.id)
            .outerjoin(BookCopyModel, TransactionModel.book_copy_id == BookCopyModel.id)
            .outerjoin(BookModel, BookCopyModel.book_id == BookModel.id)
        )

    @classmethod
    def _row_to_entities(cls, row) -> LoanRow:
        transaction_model, user_model, copy_model, book_model = row
        return (
            cls._to_entity(transaction_model),
            UserRepository._to_entity(user_model) if user_model else None,
            BookRepository._copy_to_entity(copy_model) if copy_model else None,
            BookRepository._to_entity(book_model) if book_model else None,
        )

    @staticmethod
    def _apply_entity_to_model(model: TransactionModel, transaction: Transaction) -> None:
        model.user_id = transaction.user_id
        model.book_copy_id = transaction.book_copy_id
        model.type = transaction.type
        model.checkout_date = ensure_app_naive_datetime(transaction.checkout_date)
        model.due_date = ensure_app_naive_datetime(transaction.due_date)
        model.return_date = ensure_app_naive_datetime(transaction.return_date)
        model.issued_by = transaction.issued_by
        model.returned_to = transaction.returned_to
        model.notes = transaction.notes
        model.renewal_count = transaction.renewal_count

    @staticmethod
    def _to_entity(model: TransactionModel) -> Transaction:
        return Transaction(
            id=model.id,
            user_id=model.user_id,
            book_copy_id=model.book_copy_id,
            type=model.type,
            checkout_date=ensure_app_timezone(model.checkout_date),
            due_date=ensure_app_timezone(model.due_date),
            return_date=ensure_app_timezone(model.return_date),
            issued_by=model.issued_by,
            returned_to=model.returned_to,
            notes=model.notes,
            renewal_count=model.renewal_count or 0,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["LoanRow", "TransactionRepository"]
