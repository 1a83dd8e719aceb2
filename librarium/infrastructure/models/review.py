"""SQLAlchemy model for book reviews."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from librarium.infrastructure.database import Base
from librarium.utils import now_in_app_naive_datetime


class ReviewModel(Base):
    """Database representation of a member review; one per member and book."""

    __tablename__ = "review"
    __table_args__ = (
        UniqueConstraint("user_id", "book_id", name="uq_review_user_book"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    book_id = Column(
        Integer, ForeignKey("book.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rating = Column(Integer, nullable=False)
    review_text = Column(Text, nullable=True)
    is_verified_borrower = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    user = relationship("UserModel", lazy="joined")


__all__ = ["ReviewModel"]
