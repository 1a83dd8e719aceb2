"""Aggregate application use cases."""

from .books import get_book_availability
from .notifications import mark_all_notifications_read
from .overdue import list_overdue_transactions
from .reviews import get_book_rating_stats
from .users import authenticate_user, create_user, record_login

__all__ = [
    "authenticate_user",
    "create_user",
    "get_book_availability",
    "get_book_rating_stats",
    "list_overdue_transactions",
    "mark_all_notifications_read",
    "record_login",
]
