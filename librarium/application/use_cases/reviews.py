"""Use cases for book reviews and rating statistics."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from librarium.domain.entities import MAX_RATING, MIN_RATING, RatingStats, Review
from librarium.domain.exceptions import NotFoundError, PermissionDeniedError
from librarium.infrastructure.repositories import (
    REVIEW_SORT_RATING_HIGH,
    REVIEW_SORT_RATING_LOW,
    REVIEW_SORT_RECENT,
    REVIEW_SORT_VERIFIED,
    ActivityLogRepository,
    BookRepository,
    ReviewRepository,
    TransactionRepository,
)

MAX_REVIEW_TEXT_LENGTH = 2000
MAX_REVIEWS_PAGE_SIZE = 100
REVIEW_SORT_OPTIONS = (
    REVIEW_SORT_RECENT,
    REVIEW_SORT_RATING_HIGH,
    REVIEW_SORT_RATING_LOW,
    REVIEW_SORT_VERIFIED,
)


@dataclass
class ReviewPage:
    reviews: list[Review]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return (self.total + self.limit - 1) // self.limit if self.limit else 0


def _validate_rating(rating: int) -> int:
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValueError(
            f"La calificación debe estar entre {MIN_RATING} y {MAX_RATING}"
        )
    return rating


def _clean_text(text: str | None) -> str | None:
    if text is None:
        return None
    cleaned = text.strip()
    if len(cleaned) > MAX_REVIEW_TEXT_LENGTH:
        raise ValueError(
            f"La reseña no puede superar los {MAX_REVIEW_TEXT_LENGTH} caracteres"
        )
    return cleaned or None


def _ensure_book_exists(session: Session, book_id: int) -> None:
    if not BookRepository(session).exists(book_id):
        raise NotFoundError("Libro no encontrado")


def _get_owned_review(session: Session, review_id: int, user_id: int) -> Review:
    review = ReviewRepository(session).get(review_id)
    if review is None:
        raise NotFoundError("Reseña no encontrada")
    if review.user_id != user_id:
        raise PermissionDeniedError("Solo puedes modificar tus propias reseñas")
    return review


def get_book_rating_stats(session: Session, book_id: int) -> RatingStats:
    """Return average, totals and per-star distribution for ``book_id``."""

    _ensure_book_exists(session, book_id)
    return ReviewRepository(session).rating_stats(book_id)


def list_book_reviews(
    session: Session,
    book_id: int,
    *,
    sort_by: str = REVIEW_SORT_RECENT,
    page: int = 1,
    limit: int = 10,
) -> ReviewPage:
    if sort_by not in REVIEW_SORT_OPTIONS:
        raise ValueError("Criterio de ordenamiento inválido")
    if page < 1 or not 1 <= limit <= MAX_REVIEWS_PAGE_SIZE:
        raise ValueError("Parámetros de paginación inválidos")

    _ensure_book_exists(session, book_id)
    reviews, total = ReviewRepository(session).list_for_book(
        book_id, sort_by=sort_by, skip=(page - 1) * limit, limit=limit
    )
    return ReviewPage(reviews=reviews, total=total, page=page, limit=limit)


def create_review(
    session: Session,
    *,
    user_id: int,
    book_id: int,
    rating: int,
    review_text: str | None = None,
) -> Review:
    """Add the single review a member may write for a book."""

    _ensure_book_exists(session, book_id)
    repository = ReviewRepository(session)
    if repository.get_for_user_and_book(user_id=user_id, book_id=book_id):
        raise ValueError("Ya has publicado una reseña para este libro")

    review = Review(
        id=None,
        user_id=user_id,
        book_id=book_id,
        rating=_validate_rating(rating),
        review_text=_clean_text(review_text),
        is_verified_borrower=TransactionRepository(session).has_user_borrowed_book(
            user_id, book_id
        ),
    )
    try:
        created = repository.create(review)
        ActivityLogRepository(session).record(
            user_id=user_id,
            action="create_review",
            entity_type="review",
            entity_id=created.id,
            payload={"book_id": book_id, "rating": rating},
        )
        session.commit()
    except IntegrityError as exc:
        session.rollback()
        raise ValueError("Ya has publicado una reseña para este libro") from exc
    return repository.get(created.id)


def update_review(
    session: Session,
    review_id: int,
    *,
    user_id: int,
    rating: int | None = None,
    review_text: str | None = None,
) -> Review:
    if rating is None and review_text is None:
        raise ValueError("Debes indicar al menos un campo para actualizar")

    review = _get_owned_review(session, review_id, user_id)
    if rating is not None:
        review.rating = _validate_rating(rating)
    if review_text is not None:
        review.review_text = _clean_text(review_text)

    repository = ReviewRepository(session)
    repository.update(review)
    session.commit()
    return repository.get(review_id)


def delete_review(session: Session, review_id: int, *, user_id: int) -> None:
    _get_owned_review(session, review_id, user_id)
    ReviewRepository(session).delete(review_id)
    ActivityLogRepository(session).record(
        user_id=user_id,
        action="delete_review",
        entity_type="review",
        entity_id=review_id,
    )
    session.commit()


__all__ = [
    "MAX_REVIEWS_PAGE_SIZE",
    "MAX_REVIEW_TEXT_LENGTH",
    "REVIEW_SORT_OPTIONS",
    "ReviewPage",
    "create_review",
    "delete_review",
    "get_book_rating_stats",
    "list_book_reviews",
    "update_review",
]
