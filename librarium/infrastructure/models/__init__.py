"""ORM models used by the application infrastructure."""

from .activity_log import ActivityLogModel
from .author import AuthorModel
from .book import BookCopyModel, BookModel
from .category import CategoryModel
from .notification import NotificationModel
from .reservation import ReservationModel
from .review import ReviewModel
from .role import RoleModel
from .transaction import FineModel, TransactionModel
from .user import UserModel

__all__ = [
    "ActivityLogModel",
    "AuthorModel",
    "BookCopyModel",
    "BookModel",
    "CategoryModel",
    "FineModel",
    "NotificationModel",
    "ReservationModel",
    "ReviewModel",
    "RoleModel",
    "TransactionModel",
    "UserModel",
]
