"""Review schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReviewRead(BaseModel):
    id: int
    user_id: int
    book_id: int
    rating: int
    review_text: str | None
    is_verified_borrower: bool
    user_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    review_text: str | None = Field(default=None, max_length=2000)


class ReviewUpdate(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    review_text: str | None = Field(default=None, max_length=2000)

    model_config = ConfigDict(extra="forbid")


class ReviewPagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ReviewListResponse(BaseModel):
    reviews: list[ReviewRead]
    pagination: ReviewPagination


class RatingStatsRead(BaseModel):
    """Aggregated rating figures for a single book."""

    average_rating: float
    total_reviews: int
    verified_reviews: int
    rating_distribution: dict[int, int]

    model_config = ConfigDict(from_attributes=True)
