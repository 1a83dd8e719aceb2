"""Persistence helpers for book reviews and rating aggregates."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from librarium.domain.entities import MAX_RATING, MIN_RATING, RatingStats, Review
from librarium.infrastructure.models import ReviewModel
from librarium.utils import ensure_app_timezone

REVIEW_SORT_RECENT = "recent"
REVIEW_SORT_RATING_HIGH = "rating-high"
REVIEW_SORT_RATING_LOW = "rating-low"
REVIEW_SORT_VERIFIED = "verified"

_ONE_DECIMAL = Decimal("0.1")

_ORDERINGS = {
    REVIEW_SORT_RECENT: (ReviewModel.created_at.desc(),),
    REVIEW_SORT_RATING_HIGH: (ReviewModel.rating.desc(), ReviewModel.created_at.desc()),
    REVIEW_SORT_RATING_LOW: (ReviewModel.rating.asc(), ReviewModel.created_at.desc()),
    REVIEW_SORT_VERIFIED: (
        ReviewModel.is_verified_borrower.desc(),
        ReviewModel.created_at.desc(),
    ),
}


class ReviewRepository:
    """Provide CRUD operations for :class:`Review` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, review_id: int) -> Review | None:
        model = self.session.get(ReviewModel, review_id)
        return self._to_entity(model) if model else None

    def get_for_user_and_book(self, *, user_id: int, book_id: int) -> Review | None:
        model = (
            self.session.query(ReviewModel)
            .filter(ReviewModel.user_id == user_id, ReviewModel.book_id == book_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_book(
        self,
        book_id: int,
        *,
        sort_by: str = REVIEW_SORT_RECENT,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[Review], int]:
        """Return one page of reviews for ``book_id`` and the total count."""

        base = self.session.query(ReviewModel).filter(ReviewModel.book_id == book_id)
        total = base.with_entities(func.count(ReviewModel.id)).scalar() or 0
        ordering = _ORDERINGS.get(sort_by, _ORDERINGS[REVIEW_SORT_RECENT])
        models = (
            base.order_by(*ordering, ReviewModel.id.desc()).offset(skip).limit(limit).all()
        )
        return [self._to_entity(model) for model in models], int(total)

    def create(self, review: Review) -> Review:
        model = ReviewModel(
            user_id=review.user_id,
            book_id=review.book_id,
            rating=review.rating,
            review_text=review.review_text,
            is_verified_borrower=review.is_verified_borrower,
        )
        self.session.add(model)
        self.session.flush()
        return self._to_entity(model)

    def update(self, review: Review) -> Review:
        if review.id is None:
            raise ValueError("Review id is required for updates")
        model = self.session.get(ReviewModel, review.id)
        if model is None:
            msg = f"Review with id {review.id} not found"
            raise ValueError(msg)
        model.rating = review.rating
        model.review_text = review.review_text
        self.session.flush()
        return self._to_entity(model)

    def delete(self, review_id: int) -> bool:
        model = self.session.get(ReviewModel, review_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.flush()
        return True

    def rating_stats(self, book_id: int) -> RatingStats:
        """Aggregate every review of ``book_id`` in a single query."""

        columns = [
            func.avg(ReviewModel.rating),
            func.count(ReviewModel.id),
            func.sum(case((ReviewModel.is_verified_borrower.is_(True), 1), else_=0)),
        ]
        ratings = range(MIN_RATING, MAX_RATING + 1)
        columns.extend(
            func.sum(case((ReviewModel.rating == rating, 1), else_=0)) for rating in ratings
        )
        row = (
            self.session.query(*columns)
            .filter(ReviewModel.book_id == book_id)
            .one()
        )
        average, total, verified, *per_rating = row
        return RatingStats(
            average_rating=_round_average(average),
            total_reviews=int(total or 0),
            verified_reviews=int(verified or 0),
            rating_distribution={
                rating: int(count or 0) for rating, count in zip(ratings, per_rating)
            },
        )

    @staticmethod
    def _to_entity(model: ReviewModel) -> Review:
        return Review(
            id=model.id,
            user_id=model.user_id,
            book_id=model.book_id,
            rating=model.rating,
            review_text=model.review_text,
            is_verified_borrower=bool(model.is_verified_borrower),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            user_name=model.user.name if model.user is not None else None,
        )


def _round_average(average) -> float:
    """Round to one decimal with ties going away from zero (2.25 -> 2.3)."""

    if average is None:
        return 0.0
    return float(Decimal(str(average)).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


__all__ = [
    "REVIEW_SORT_RATING_HIGH",
    "REVIEW_SORT_RATING_LOW",
    "REVIEW_SORT_RECENT",
    "REVIEW_SORT_VERIFIED",
    "ReviewRepository",
]
