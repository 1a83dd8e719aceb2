"""Reservation schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from .book import BookRead


class ReservationCreate(BaseModel):
    book_id: int = Field(..., ge=1)


class ReservationRead(BaseModel):
    id: int
    user_id: int
    book_id: int
    status: str
    queue_position: int | None
    reserved_at: datetime | None
    notified_at: datetime | None = None
    fulfilled_at: datetime | None = None
    expires_at: datetime | None = None
    book: BookRead | None = None


class ReservationListResponse(BaseModel):
    reservations: list[ReservationRead]
    total: int
    page: int
    limit: int
