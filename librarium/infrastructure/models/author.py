"""SQLAlchemy model for book authors."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from librarium.infrastructure.database import Base
from librarium.utils import now_in_app_naive_datetime


class AuthorModel(Base):
    __tablename__ = "author"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, unique=True)
    bio = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["AuthorModel"]
