"""SQLAlchemy models for loans and the fines they generate."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String, Text

from librarium.infrastructure.database import Base
from librarium.utils import now_in_app_naive_datetime


class TransactionModel(Base):
    """Database representation of a checkout (and its eventual return)."""

    __tablename__ = "transaction"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    book_copy_id = Column(Integer, ForeignKey("book_copy.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False, default="checkout")
    checkout_date = Column(DateTime, nullable=True)
    due_date = Column(DateTime, nullable=True)
    return_date = Column(DateTime, nullable=True)
    issued_by = Column(Integer, ForeignKey("user.id"), nullable=True)
    returned_to = Column(Integer, ForeignKey("user.id"), nullable=True)
    notes = Column(Text, nullable=True)
    renewal_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class FineModel(Base):
    """Database representation of a fine owed by a member."""

    __tablename__ = "fine"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    transaction_id = Column(Integer, ForeignKey("transaction.id"), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    reason = Column(String(255), nullable=True)
    days_overdue = Column(Integer, nullable=True)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["FineModel", "TransactionModel"]
