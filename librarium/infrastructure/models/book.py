"""SQLAlchemy models for catalog books and their physical copies."""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from librarium.infrastructure.database import Base
from librarium.utils import now_in_app_naive_datetime


class BookModel(Base):
    """Database representation of a catalog title."""

    __tablename__ = "book"
    __table_args__ = (
        CheckConstraint("total_copies >= 0", name="ck_book_total_copies"),
        CheckConstraint("available_copies >= 0", name="ck_book_available_copies"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False, index=True)
    isbn = Column(String(20), nullable=True, unique=True)
    author_id = Column(Integer, ForeignKey("author.id"), nullable=True, index=True)
    category_id = Column(Integer, ForeignKey("category.id"), nullable=True, index=True)
    publication_year = Column(Integer, nullable=True)
    language = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)
    total_copies = Column(Integer, nullable=False, default=1)
    available_copies = Column(Integer, nullable=False, default=1)
    shelf_location = Column(String(50), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    author = relationship("AuthorModel", lazy="joined")
    category = relationship("CategoryModel", lazy="joined")
    copies = relationship(
        "BookCopyModel",
        back_populates="book",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class BookCopyModel(Base):
    """Database representation of a single lendable copy."""

    __tablename__ = "book_copy"

    id = Column(Integer, primary_key=True, index=True)
    book_id = Column(
        Integer, ForeignKey("book.id", ondelete="CASCADE"), nullable=False, index=True
    )
    copy_number = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="available")
    condition = Column(String(20), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    book = relationship("BookModel", back_populates="copies")


__all__ = ["BookCopyModel", "BookModel"]
