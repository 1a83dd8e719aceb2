"""Read model describing an overdue loan together with its context."""

from __future__ import annotations

from dataclasses import dataclass

from .book import Book, BookCopy
from .transaction import Transaction
from .user import User


@dataclass
class OverdueTransaction:
    """A loan past its due date joined with the member, copy and book."""

    transaction: Transaction
    user: User | None
    book_copy: BookCopy | None
    book: Book | None
    days_overdue: int


__all__ = ["OverdueTransaction"]
