"""Persistence helpers for fines owed by members."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from librarium.domain.entities import Book, Fine, Transaction, User
from librarium.infrastructure.models import (
    BookCopyModel,
    BookModel,
    FineModel,
    TransactionModel,
    UserModel,
)
from librarium.utils import ensure_app_timezone

from .book_repository import BookRepository
from .transaction_repository import TransactionRepository
from .user_repository import UserRepository

_CENTS = Decimal("0.01")


class FineRepository:
    """Provide CRUD operations and reporting queries for :class:`Fine`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, fine_id: int) -> Fine | None:
        model = self.session.get(FineModel, fine_id)
        return self._to_entity(model) if model else None

    def create(self, fine: Fine) -> Fine:
        model = FineModel(
            user_id=fine.user_id,
            transaction_id=fine.transaction_id,
            amount=fine.amount,
            reason=fine.reason,
            days_overdue=fine.days_overdue,
            status=fine.status,
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def set_status(self, fine_id: int, status: str) -> Fine | None:
        model = self.session.get(FineModel, fine_id)
        if model is None:
            return None
        model.status = status
        self.session.flush()
        return self._to_entity(model)

    def list_with_members(
        self, *, status: str | None = None
    ) -> list[tuple[Fine, User | None, Transaction | None]]:
        """Return every fine, newest first, with its member and loan."""

        query = (
            self.session.query(FineModel, UserModel, TransactionModel)
            .outerjoin(UserModel, FineModel.user_id == UserModel.id)
            .outerjoin(TransactionModel, FineModel.transaction_id == TransactionModel.id)
        )
        if status is not None:
            query = query.filter(FineModel.status == status)
        rows = query.order_by(FineModel.created_at.desc(), FineModel.id.desc()).all()
        return [
            (
                self._to_entity(fine_model),
                UserRepository._to_entity(user_model) if user_model else None,
                TransactionRepository._to_entity(transaction_model)
                if transaction_model
                else None,
            )
            for fine_model, user_model, transaction_model in rows
        ]

    def list_for_user_with_books(
        self, user_id: int
    ) -> list[tuple[Fine, Transaction | None, Book | None]]:
        """Return the fines of ``user_id``, newest first, with the borrowed book."""

        rows = (
            self.session.query(FineModel, TransactionModel, BookModel)
            .outerjoin(TransactionModel, FineModel.transaction_id == TransactionModel.id)
            .outerjoin(BookCopyModel, TransactionModel.book_copy_id == BookCopyModel.id)
            .outerjoin(BookModel, BookCopyModel.book_id == BookModel.id)
            .filter(FineModel.user_id == user_id)
            .order_by(FineModel.created_at.desc(), FineModel.id.desc())
            .all()
        )
        return [
            (
                self._to_entity(fine_model),
                TransactionRepository._to_entity(transaction_model)
                if transaction_model
                else None,
                BookRepository._to_entity(book_model) if book_model else None,
            )
            for fine_model, transaction_model, book_model in rows
        ]

    def totals_by_status(self) -> dict[str, tuple[int, Decimal]]:
        """Return ``{status: (count, amount)}`` computed in one grouped query."""

        rows = (
            self.session.query(
                FineModel.status,
                func.count(FineModel.id),
                func.sum(FineModel.amount),
            )
            .group_by(FineModel.status)
            .all()
        )
        return {
            status: (int(count or 0), Decimal(str(total or 0)).quantize(_CENTS))
            for status, count, total in rows
        }

    @staticmethod
    def _to_entity(model: FineModel) -> Fine:
        return Fine(
            id=model.id,
            user_id=model.user_id,
            transaction_id=model.transaction_id,
            amount=Decimal(str(model.amount)).quantize(_CENTS),
            reason=model.reason,
            days_overdue=model.days_overdue,
            status=model.status,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["FineRepository"]
