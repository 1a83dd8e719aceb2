"""SQLAlchemy model for the user table."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from librarium.infrastructure.database import Base
from librarium.utils import now_in_app_naive_datetime


class UserModel(Base):
    """Database representation of a member or staff account."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(Integer, ForeignKey("role.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)
    membership_expiry = Column(DateTime, nullable=True)
    membership_type = Column(String(20), nullable=False, default="standard")
    is_active = Column(Boolean, nullable=False, default=True)
    last_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    role = relationship("RoleModel", lazy="joined")


__all__ = ["UserModel"]
