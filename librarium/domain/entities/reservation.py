"""Domain entity representing a hold placed on a book."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

RESERVATION_STATUS_ACTIVE = "active"
RESERVATION_STATUS_FULFILLED = "fulfilled"
RESERVATION_STATUS_CANCELLED = "cancelled"
RESERVATION_STATUS_EXPIRED = "expired"

RESERVATION_STATUSES = (
    RESERVATION_STATUS_ACTIVE,
    RESERVATION_STATUS_FULFILLED,
    RESERVATION_STATUS_CANCELLED,
    RESERVATION_STATUS_EXPIRED,
)


@dataclass
class Reservation:
    """A member's place in the hold queue of a book."""

    id: int | None
    user_id: int
    book_id: int
    status: str
    queue_position: int | None
    reserved_at: datetime | None
    notified_at: datetime | None = None
    fulfilled_at: datetime | None = None
    expires_at: datetime | None = None

    def is_active(self) -> bool:
        return self.status == RESERVATION_STATUS_ACTIVE


__all__ = [
    "RESERVATION_STATUSES",
    "RESERVATION_STATUS_ACTIVE",
    "RESERVATION_STATUS_CANCELLED",
    "RESERVATION_STATUS_EXPIRED",
    "RESERVATION_STATUS_FULFILLED",
    "Reservation",
]
