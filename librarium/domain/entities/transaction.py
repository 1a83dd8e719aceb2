"""Domain entities for loans (checkout transactions) and fines."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

TRANSACTION_TYPE_CHECKOUT = "checkout"

FINE_STATUS_PENDING = "pending"
FINE_STATUS_PAID = "paid"
FINE_STATUS_WAIVED = "waived"
FINE_STATUSES = (FINE_STATUS_PENDING, FINE_STATUS_PAID, FINE_STATUS_WAIVED)


@dataclass
class Transaction:
    """A borrowing record linking a member to a book copy."""

    id: int | None
    user_id: int
    book_copy_id: int
    type: str
    checkout_date: datetime | None
    due_date: datetime | None
    return_date: datetime | None = None
    issued_by: int | None = None
    returned_to: int | None = None
    notes: str | None = None
    renewal_count: int = 0
    created_at: datetime | None = None

    def is_returned(self) -> bool:
        return self.return_date is not None

    def is_overdue(self, reference: datetime) -> bool:
        """Return ``True`` when the loan is still out past its due date."""

        return (
            self.return_date is None
            and self.due_date is not None
            and self.due_date < reference
        )


@dataclass
class Fine:
    """Amount owed by a member, usually for a late return."""

    id: int | None
    user_id: int
    transaction_id: int | None
    amount: Decimal
    reason: str | None
    days_overdue: int | None
    status: str = FINE_STATUS_PENDING
    created_at: datetime | None = None


__all__ = [
    "FINE_STATUS_PAID",
    "FINE_STATUS_PENDING",
    "FINE_STATUS_WAIVED",
    "FINE_STATUSES",
    "TRANSACTION_TYPE_CHECKOUT",
    "Fine",
    "Transaction",
]
