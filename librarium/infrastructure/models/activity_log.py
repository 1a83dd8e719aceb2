"""SQLAlchemy model for the activity log."""

from sqlalchemy import Column, DateTime, Integer, String

from librarium.infrastructure.database import Base, json_type
from librarium.utils import now_in_app_naive_datetime


class ActivityLogModel(Base):
    """Database representation of audited actions."""

    __tablename__ = "activity_log"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=True, index=True)
    action = Column(String(50), nullable=False)
    entity_type = Column(String(50), nullable=True)
    entity_id = Column(Integer, nullable=True)
    payload = Column(json_type, nullable=False, default=dict)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ActivityLogModel"]
