"""Use cases for the book catalog."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from librarium.domain.entities import Book, BookAvailability
from librarium.domain.exceptions import NotFoundError
from librarium.infrastructure.repositories import (
    ActivityLogRepository,
    BookRepository,
    ReservationRepository,
)

MAX_COPIES_PER_BOOK = 100


@dataclass
class BookPage:
    books: list[Book]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


def list_books(
    session: Session, *, query: str | None = None, page: int = 1, limit: int = 20
) -> BookPage:
    """Return one page of the catalog, optionally filtered by title, author or ISBN."""

    books, total = BookRepository(session).search(
        query=query, skip=(page - 1) * limit, limit=limit
    )
    return BookPage(books=books, total=total, page=page, limit=limit)


def get_book(session: Session, book_id: int) -> Book:
    book = BookRepository(session).get(book_id)
    if book is None:
        raise NotFoundError("Libro no encontrado")
    return book


def get_book_availability(session: Session, book_id: int) -> BookAvailability:
    """Return the lending state of ``book_id`` and its hold queue length."""

    book = get_book(session, book_id)
    queue_length = ReservationRepository(session).count_active(book_id)
    return BookAvailability(
        available=book.available_copies > 0,
        available_copies=book.available_copies,
        total_copies=book.total_copies,
        queue_length=queue_length,
    )


def create_book(
    session: Session,
    *,
    title: str,
    copies: int,
    isbn: str | None = None,
    author_name: str | None = None,
    category_name: str | None = None,
    publication_year: int | None = None,
    language: str | None = None,
    description: str | None = None,
    shelf_location: str | None = None,
    created_by: int | None = None,
) -> Book:
    """Add a title to the catalog together with ``copies`` lendable copies."""

    cleaned_title = (title or "").strip()
    if not cleaned_title:
        raise ValueError("El título es obligatorio")
    if copies < 1 or copies > MAX_COPIES_PER_BOOK:
        raise ValueError(
            f"La cantidad de ejemplares debe estar entre 1 y {MAX_COPIES_PER_BOOK}"
        )

    repository = BookRepository(session)
    cleaned_isbn = (isbn or "").strip() or None
    if cleaned_isbn and repository.get_by_isbn(cleaned_isbn):
        raise ValueError("Ya existe un libro con ese ISBN")

    book = Book(
        id=None,
        title=cleaned_title,
        isbn=cleaned_isbn,
        author_name=None,
        category_name=None,
        publication_year=publication_year,
        language=language,
        description=description,
        total_copies=copies,
        available_copies=copies,
        shelf_location=shelf_location,
    )
    created = repository.create(book, author_name=author_name, category_name=category_name)
    ActivityLogRepository(session).record(
        user_id=created_by,
        action="book_created",
        entity_type="book",
        entity_id=created.id,
        payload={"title": cleaned_title, "copies": copies},
    )
    session.commit()
    return created


__all__ = [
    "BookPage",
    "MAX_COPIES_PER_BOOK",
    "create_book",
    "get_book",
    "get_book_availability",
    "list_books",
]
