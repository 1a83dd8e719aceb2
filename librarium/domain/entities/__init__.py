"""Domain entities exposed by the application."""

from .activity import ActivityLog
from .book import (
    COPY_STATUS_AVAILABLE,
    COPY_STATUS_BORROWED,
    COPY_STATUS_IN_REPAIR,
    COPY_STATUS_LOST,
    Book,
    BookAvailability,
    BookCopy,
)
from .notification import (
    NOTIFICATION_DUE_SOON,
    NOTIFICATION_FINE_ADDED,
    NOTIFICATION_GENERAL,
    NOTIFICATION_OVERDUE,
    NOTIFICATION_RESERVATION_READY,
    Notification,
)
from .overdue import OverdueTransaction
from .reservation import (
    RESERVATION_STATUSES,
    RESERVATION_STATUS_ACTIVE,
    RESERVATION_STATUS_CANCELLED,
    RESERVATION_STATUS_EXPIRED,
    RESERVATION_STATUS_FULFILLED,
    Reservation,
)
from .review import MAX_RATING, MIN_RATING, RatingStats, Review
from .role import (
    ADMIN_ROLE_ALIASES,
    ROLE_ADMIN,
    ROLE_DIRECTOR,
    ROLE_MEMBER,
    ROLE_STAFF,
    Role,
)
from .transaction import (
    FINE_STATUS_PAID,
    FINE_STATUS_PENDING,
    FINE_STATUS_WAIVED,
    FINE_STATUSES,
    TRANSACTION_TYPE_CHECKOUT,
    Fine,
    Transaction,
)
from .user import MEMBERSHIP_PREMIUM, MEMBERSHIP_STANDARD, MEMBERSHIP_STUDENT, User

__all__ = [
    "ActivityLog",
    "ADMIN_ROLE_ALIASES",
    "Book",
    "BookAvailability",
    "BookCopy",
    "COPY_STATUS_AVAILABLE",
    "COPY_STATUS_BORROWED",
    "COPY_STATUS_IN_REPAIR",
    "COPY_STATUS_LOST",
    "Fine",
    "FINE_STATUS_PAID",
    "FINE_STATUS_PENDING",
    "FINE_STATUS_WAIVED",
    "FINE_STATUSES",
    "MAX_RATING",
    "MEMBERSHIP_PREMIUM",
    "MEMBERSHIP_STANDARD",
    "MEMBERSHIP_STUDENT",
    "MIN_RATING",
    "Notification",
    "NOTIFICATION_DUE_SOON",
    "NOTIFICATION_FINE_ADDED",
    "NOTIFICATION_GENERAL",
    "NOTIFICATION_OVERDUE",
    "NOTIFICATION_RESERVATION_READY",
    "OverdueTransaction",
    "RatingStats",
    "Reservation",
    "RESERVATION_STATUSES",
    "RESERVATION_STATUS_ACTIVE",
    "RESERVATION_STATUS_CANCELLED",
    "RESERVATION_STATUS_EXPIRED",
    "RESERVATION_STATUS_FULFILLED",
    "Review",
    "Role",
    "ROLE_ADMIN",
    "ROLE_DIRECTOR",
    "ROLE_MEMBER",
    "ROLE_STAFF",
    "Transaction",
    "TRANSACTION_TYPE_CHECKOUT",
    "User",
]
