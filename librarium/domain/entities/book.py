"""Domain entities describing catalog books and their physical copies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

COPY_STATUS_AVAILABLE = "available"
COPY_STATUS_BORROWED = "borrowed"
COPY_STATUS_IN_REPAIR = "in_repair"
COPY_STATUS_LOST = "lost"


@dataclass
class Book:
    """A catalog title with its copy counters."""

    id: int | None
    title: str
    isbn: str | None
    author_name: str | None
    category_name: str | None
    publication_year: int | None
    language: str | None
    description: str | None
    total_copies: int
    available_copies: int
    shelf_location: str | None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class BookCopy:
    """A single physical copy of a book that can be lent."""

    id: int | None
    book_id: int
    copy_number: int
    status: str = COPY_STATUS_AVAILABLE
    condition: str | None = None

    def is_available(self) -> bool:
        return self.status == COPY_STATUS_AVAILABLE


@dataclass
class BookAvailability:
    """Current lending state of a book and the length of its hold queue."""

    available: bool
    available_copies: int
    total_copies: int
    queue_length: int


__all__ = [
    "COPY_STATUS_AVAILABLE",
    "COPY_STATUS_BORROWED",
    "COPY_STATUS_IN_REPAIR",
    "COPY_STATUS_LOST",
    "Book",
    "BookAvailability",
    "BookCopy",
]
