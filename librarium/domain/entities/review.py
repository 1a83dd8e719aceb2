"""Domain entities for book reviews and their aggregate statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

MIN_RATING = 1
MAX_RATING = 5


@dataclass
class Review:
    """A member's rating and optional text for a book."""

    id: int | None
    user_id: int
    book_id: int
    rating: int
    review_text: str | None
    is_verified_borrower: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user_name: str | None = None


@dataclass
class RatingStats:
    """Aggregate view over every review of a book."""

    average_rating: float
    total_reviews: int
    verified_reviews: int
    rating_distribution: dict[int, int] = field(
        default_factory=lambda: {rating: 0 for rating in range(MIN_RATING, MAX_RATING + 1)}
    )


__all__ = ["MAX_RATING", "MIN_RATING", "RatingStats", "Review"]
