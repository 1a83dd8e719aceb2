"""SQLAlchemy model for book categories."""

from sqlalchemy import Column, DateTime, Integer, String, Text

from librarium.infrastructure.database import Base
from librarium.utils import now_in_app_naive_datetime


class CategoryModel(Base):
    __tablename__ = "category"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["CategoryModel"]
