"""SQLAlchemy model for book reservations (holds)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from librarium.infrastructure.database import Base
from librarium.utils import now_in_app_naive_datetime


class ReservationModel(Base):
    __tablename__ = "reservation"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    book_id = Column(Integer, ForeignKey("book.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="active")
    queue_position = Column(Integer, nullable=True)
    reserved_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    notified_at = Column(DateTime, nullable=True)
    fulfilled_at = Column(DateTime, nullable=True)
    expires_at = Column(DateTime, nullable=True)


__all__ = ["ReservationModel"]
