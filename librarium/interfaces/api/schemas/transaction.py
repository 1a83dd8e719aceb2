"""Loan, renewal, fine and overdue report schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class IssueBookRequest(BaseModel):
    user_id: int = Field(..., ge=1)
    book_copy_id: int = Field(..., ge=1)
    due_date: datetime
    notes: str | None = Field(default=None, max_length=1000)


class ReturnBookRequest(BaseModel):
    transaction_id: int = Field(..., ge=1)
    notes: str | None = Field(default=None, max_length=1000)


class TransactionRead(BaseModel):
    id: int
    user_id: int
    book_copy_id: int
    type: str
    checkout_date: datetime | None
    due_date: datetime | None
    return_date: datetime | None
    issued_by: int | None = None
    returned_to: int | None = None
    notes: str | None = None
    renewal_count: int = 0

    model_config = ConfigDict(from_attributes=True)


class FineRead(BaseModel):
    id: int
    user_id: int
    transaction_id: int | None
    amount: Decimal
    reason: str | None
    days_overdue: int | None
    status: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ReturnBookResponse(BaseModel):
    transaction: TransactionRead
    fine: FineRead | None
    overdue_days: int
    fine_amount: Decimal


class BookCopyRead(BaseModel):
    id: int
    book_id: int
    copy_number: int
    status: str
    condition: str | None = None

    model_config = ConfigDict(from_attributes=True)


class LoanBookRead(BaseModel):
    id: int
    title: str
    isbn: str | None
    author_name: str | None

    model_config = ConfigDict(from_attributes=True)


class LoanMemberRead(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class BorrowedBookRead(BaseModel):
    transaction: TransactionRead
    book_copy: BookCopyRead | None
    book: LoanBookRead | None
    is_overdue: bool
    days_overdue: int

    model_config = ConfigDict(from_attributes=True)


class OverdueTransactionRead(BaseModel):
    """An unreturned loan past its due date with its member, copy and book."""

    transaction: TransactionRead
    user: LoanMemberRead | None
    book_copy: BookCopyRead | None
    book: LoanBookRead | None
    days_overdue: int

    model_config = ConfigDict(from_attributes=True)


class OverdueReminderResponse(BaseModel):
    notified: int


class RenewLoanRequest(BaseModel):
    transaction_id: int = Field(..., ge=1)


class RenewLoanResponse(BaseModel):
    transaction: TransactionRead
    new_due_date: datetime
    renewal_count: int
    max_renewals: int
    renewals_remaining: int


class FineTransactionRead(BaseModel):
    id: int
    checkout_date: datetime | None
    due_date: datetime | None
    return_date: datetime | None

    model_config = ConfigDict(from_attributes=True)


class FineDetailRead(BaseModel):
    """A fine as listed for staff, with the member and the loan behind it."""

    fine: FineRead
    user: LoanMemberRead | None
    transaction: FineTransactionRead | None

    model_config = ConfigDict(from_attributes=True)


class FineStatusTotalsRead(BaseModel):
    count: int
    amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class FineStatsRead(BaseModel):
    pending: FineStatusTotalsRead
    paid: FineStatusTotalsRead
    waived: FineStatusTotalsRead

    model_config = ConfigDict(from_attributes=True)


class MemberFineRead(BaseModel):
    fine: FineRead
    transaction: FineTransactionRead | None
    book: LoanBookRead | None

    model_config = ConfigDict(from_attributes=True)


class MemberFineSummaryRead(BaseModel):
    total_pending: Decimal
    total_paid: Decimal
    pending_count: int
    paid_count: int
    waived_count: int

    model_config = ConfigDict(from_attributes=True)


class MemberFinesResponse(BaseModel):
    fines: list[MemberFineRead]
    summary: MemberFineSummaryRead

    model_config = ConfigDict(from_attributes=True)
