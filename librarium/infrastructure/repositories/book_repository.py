"""Persistence helpers for books, copies, authors and categories."""

from __future__ import annotations

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from librarium.domain.entities import Book, BookCopy
from librarium.infrastructure.models import (
    AuthorModel,
    BookCopyModel,
    BookModel,
    CategoryModel,
)
from librarium.utils import ensure_app_timezone


class BookRepository:
    """Provide catalog queries and copy bookkeeping."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, book_id: int) -> Book | None:
        model = self.session.get(BookModel, book_id)
        return self._to_entity(model) if model else None

    def exists(self, book_id: int) -> bool:
        return (
            self.session.query(BookModel.id).filter(BookModel.id == book_id).first()
            is not None
        )

    def get_by_isbn(self, isbn: str) -> Book | None:
        model = self.session.query(BookModel).filter(BookModel.isbn == isbn).first()
        return self._to_entity(model) if model else None

    def search(
        self, *, query: str | None = None, skip: int = 0, limit: int = 20
    ) -> tuple[list[Book], int]:
        """Return one page of books matching ``query`` and the total match count."""

        base = self.session.query(BookModel).outerjoin(
            AuthorModel, BookModel.author_id == AuthorModel.id
        )
        if query:
            pattern = f"%{query.strip().lower()}%"
            base = base.filter(
                or_(
                    func.lower(BookModel.title).like(pattern),
                    func.lower(AuthorModel.name).like(pattern),
                    BookModel.isbn.like(pattern),
                )
            )
        total = base.with_entities(func.count(BookModel.id)).scalar() or 0
        models = base.order_by(BookModel.title, BookModel.id).offset(skip).limit(limit).all()
        return [self._to_entity(model) for model in models], int(total)

    def create(
        self,
        book: Book,
        *,
        author_name: str | None = None,
        category_name: str | None = None,
    ) -> Book:
        """Stage ``book`` with ``book.total_copies`` available copies and flush it."""

        model = BookModel(
            title=book.title,
            isbn=book.isbn,
            publication_year=book.publication_year,
            language=book.language,
            description=book.description,
            total_copies=book.total_copies,
            available_copies=book.total_copies,
            shelf_location=book.shelf_location,
        )
        if author_name:
            model.author = self._get_or_create_author(author_name)
        if category_name:
            model.category = self._get_or_create_category(category_name)
        model.copies = [
            BookCopyModel(copy_number=number, status="available")
            for number in range(1, book.total_copies + 1)
        ]
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def adjust_available_copies(self, book_id: int, delta: int) -> None:
        """Stage an in-database increment of ``available_copies`` by ``delta``."""

        self.session.query(BookModel).filter(BookModel.id == book_id).update(
            {BookModel.available_copies: BookModel.available_copies + delta},
            synchronize_session=False,
        )

    def get_copy(self, copy_id: int) -> BookCopy | None:
        model = self.session.get(BookCopyModel, copy_id)
        return self._copy_to_entity(model) if model else None

    def set_copy_status(self, copy_id: int, status: str) -> None:
        self.session.query(BookCopyModel).filter(BookCopyModel.id == copy_id).update(
            {BookCopyModel.status: status}, synchronize_session=False
        )

    def _get_or_create_author(self, name: str) -> AuthorModel:
        cleaned = name.strip()
        author = (
            self.session.query(AuthorModel)
            .filter(func.lower(AuthorModel.name) == cleaned.lower())
            .first()
        )
        if author is None:
            author = AuthorModel(name=cleaned)
            self.session.add(author)
        return author

    def _get_or_create_category(self, name: str) -> CategoryModel:
        cleaned = name.strip()
        category = (
            self.session.query(CategoryModel)
            .filter(func.lower(CategoryModel.name) == cleaned.lower())
            .first()
        )
        if category is None:
            category = CategoryModel(name=cleaned)
            self.session.add(category)
        return category

    @staticmethod
    def _to_entity(model: BookModel) -> Book:
        return Book(
            id=model.id,
            title=model.title,
            isbn=model.isbn,
            author_name=model.author.name if model.author else None,
            category_name=model.category.name if model.category else None,
            publication_year=model.publication_year,
            language=model.language,
            description=model.description,
            total_copies=model.total_copies or 0,
            available_copies=model.available_copies or 0,
            shelf_location=model.shelf_location,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _copy_to_entity(model: BookCopyModel) -> BookCopy:
        return BookCopy(
            id=model.id,
            book_id=model.book_id,
            copy_number=model.copy_number,
            status=model.status,
            condition=model.condition,
        )


__all__ = ["BookRepository"]
