"""Repository implementations for infrastructure layer."""

from .activity_log_repository import ActivityLogRepository
from .book_repository import BookRepository
from .fine_repository import FineRepository
from .notification_repository import NotificationRepository
from .reservation_repository import ReservationRepository
from .review_repository import (
    REVIEW_SORT_RATING_HIGH,
    REVIEW_SORT_RATING_LOW,
    REVIEW_SORT_RECENT,
    REVIEW_SORT_VERIFIED,
    ReviewRepository,
)
from .role_repository import DEFAULT_ROLES, RoleRepository
from .transaction_repository import LoanRow, TransactionRepository
from .user_repository import UserRepository

__all__ = [
    "ActivityLogRepository",
    "BookRepository",
    "DEFAULT_ROLES",
    "FineRepository",
    "LoanRow",
    "NotificationRepository",
    "REVIEW_SORT_RATING_HIGH",
    "REVIEW_SORT_RATING_LOW",
    "REVIEW_SORT_RECENT",
    "REVIEW_SORT_VERIFIED",
    "ReservationRepository",
    "ReviewRepository",
    "RoleRepository",
    "TransactionRepository",
    "UserRepository",
]
