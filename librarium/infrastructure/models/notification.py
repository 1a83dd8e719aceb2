"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import expression

from librarium.infrastructure.database import Base, json_type
from librarium.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    type = Column(String(30), nullable=False)
    title = Column(String(120), nullable=False)
    message = Column(Text, nullable=False)
    link = Column(String(255), nullable=True)
    payload = Column(json_type, nullable=False, default=dict)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
