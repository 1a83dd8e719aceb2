"""Use cases for lending books: issuing, renewing and returning loans."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from librarium.config import get_settings
from librarium.domain.entities import (
    COPY_STATUS_AVAILABLE,
    COPY_STATUS_BORROWED,
    FINE_STATUS_PENDING,
    MEMBERSHIP_PREMIUM,
    MEMBERSHIP_STANDARD,
    MEMBERSHIP_STUDENT,
    TRANSACTION_TYPE_CHECKOUT,
    Book,
    BookCopy,
    Fine,
    Notification,
    Transaction,
)
from librarium.domain.exceptions import NotFoundError
from librarium.infrastructure.repositories import (
    ActivityLogRepository,
    BookRepository,
    FineRepository,
    TransactionRepository,
    UserRepository,
)
from librarium.utils import days_between, ensure_app_timezone, now_in_app_timezone

from .notifications import publish_notifications, stage_fine_added
from .reservations import try_assign_next_in_queue

logger = logging.getLogger(__name__)

_CENTS = Decimal("0.01")

RENEWAL_PERIOD_DAYS = 14
RENEWAL_LIMITS = {
    MEMBERSHIP_STANDARD: 2,
    MEMBERSHIP_PREMIUM: 5,
    MEMBERSHIP_STUDENT: 3,
}


@dataclass
class ReturnResult:
    transaction: Transaction
    fine: Fine | None
    overdue_days: int
    fine_amount: Decimal
    book_id: int | None


@dataclass
class RenewalResult:
    transaction: Transaction
    renewal_count: int
    max_renewals: int

    @property
    def renewals_remaining(self) -> int:
        return max(0, self.max_renewals - self.renewal_count)


@dataclass
class BorrowedBook:
    transaction: Transaction
    book_copy: BookCopy | None
    book: Book | None
    is_overdue: bool
    days_overdue: int


def calculate_fine(overdue_days: int, fine_per_day: Decimal) -> Decimal:
    """Return the fine owed for ``overdue_days`` late days, rounded to cents."""

    if overdue_days <= 0:
        return Decimal("0.00")
    return (Decimal(overdue_days) * fine_per_day).quantize(_CENTS)


def issue_book(
    session: Session,
    *,
    user_id: int,
    book_copy_id: int,
    due_date: datetime,
    notes: str | None = None,
    issued_by: int | None = None,
) -> Transaction:
    """Lend ``book_copy_id`` to ``user_id`` until ``due_date``."""

    book_repository = BookRepository(session)
    transaction_repository = TransactionRepository(session)

    book_copy = book_repository.get_copy(book_copy_id)
    if book_copy is None:
        raise NotFoundError("Ejemplar no encontrado")
    if not book_copy.is_available():
        raise ValueError(f"El ejemplar está {book_copy.status} y no puede prestarse")

    user = UserRepository(session).get(user_id)
    if user is None:
        raise NotFoundError("Usuario no encontrado")
    if not user.is_active:
        raise ValueError("Usuario inactivo")

    now = now_in_app_timezone()
    if user.membership_expired(now):
        raise ValueError("La membresía del usuario ha expirado")
    if any(loan.is_overdue(now) for loan in transaction_repository.list_open_for_user(user_id)):
        raise ValueError("El usuario tiene libros vencidos y no puede solicitar más")

    due = ensure_app_timezone(due_date)
    if due <= now:
        raise ValueError("La fecha de vencimiento debe ser posterior a la fecha actual")

    transaction = transaction_repository.create(
        Transaction(
            id=None,
            user_id=user_id,
            book_copy_id=book_copy_id,
            type=TRANSACTION_TYPE_CHECKOUT,
            checkout_date=now,
            due_date=due,
            issued_by=issued_by,
            notes=notes,
        )
    )
    book_repository.set_copy_status(book_copy_id, COPY_STATUS_BORROWED)
    book_repository.adjust_available_copies(book_copy.book_id, -1)
    ActivityLogRepository(session).record(
        user_id=issued_by,
        action="issue_book",
        entity_type="transaction",
        entity_id=transaction.id,
        payload={"book_copy_id": book_copy_id, "user_id": user_id},
    )
    session.commit()
    logger.info("Issued copy %s to user %s", book_copy_id, user_id)
    return transaction


def return_book(
    session: Session,
    *,
    transaction_id: int,
    notes: str | None = None,
    returned_to: int | None = None,
) -> ReturnResult:
    """Close a loan, charge the late fine and hand the copy to the hold queue."""

    book_repository = BookRepository(session)
    transaction_repository = TransactionRepository(session)

    transaction = transaction_repository.get(transaction_id)
    if transaction is None:
        raise NotFoundError("Transacción no encontrada")
    if transaction.is_returned():
        raise ValueError("El libro ya fue devuelto")

    now = now_in_app_timezone()
    overdue_days = days_between(transaction.due_date, now) if transaction.due_date else 0
    fine_amount = calculate_fine(overdue_days, get_settings().fine_per_day)

    transaction.return_date = now
    transaction.returned_to = returned_to
    transaction.notes = notes or transaction.notes
    updated = transaction_repository.update(transaction)

    book_copy = book_repository.get_copy(transaction.book_copy_id)
    book_id = book_copy.book_id if book_copy else None
    book_repository.set_copy_status(transaction.book_copy_id, COPY_STATUS_AVAILABLE)
    if book_id is not None:
        book_repository.adjust_available_copies(book_id, 1)

    fine: Fine | None = None
    staged: list[Notification] = []
    if overdue_days > 0 and fine_amount > 0:
        fine = FineRepository(session).create(
            Fine(
                id=None,
                user_id=transaction.user_id,
                transaction_id=transaction_id,
                amount=fine_amount,
                reason=f"Libro devuelto con {overdue_days} día(s) de retraso",
                days_overdue=overdue_days,
                status=FINE_STATUS_PENDING,
            )
        )
        staged.append(
            stage_fine_added(
                session,
                user_id=transaction.user_id,
                fine_id=fine.id,
                amount=fine_amount,
                days_overdue=overdue_days,
                book=book_repository.get(book_id) if book_id is not None else None,
            )
        )

    ActivityLogRepository(session).record(
        user_id=returned_to,
        action="return_book",
        entity_type="transaction",
        entity_id=transaction_id,
        payload={
            "book_copy_id": transaction.book_copy_id,
            "overdue_days": overdue_days,
            "fine_amount": str(fine_amount),
        },
    )
    session.commit()
    publish_notifications(staged)

    if book_id is not None:
        try_assign_next_in_queue(session, book_id)

    return ReturnResult(
        transaction=updated,
        fine=fine,
        overdue_days=overdue_days,
        fine_amount=fine_amount,
        book_id=book_id,
    )


def renew_loan(session: Session, *, transaction_id: int, user_id: int) -> RenewalResult:
    """Extend an open loan of ``user_id`` by ``RENEWAL_PERIOD_DAYS``.

    Each membership type allows a fixed number of renewals per loan
    (``RENEWAL_LIMITS``). Overdue loans cannot be renewed; the member has to
    return the book first.
    """

    transaction_repository = TransactionRepository(session)
    transaction = transaction_repository.get(transaction_id)
    if transaction is None or transaction.user_id != user_id or transaction.is_returned():
        raise NotFoundError("Préstamo no encontrado o ya devuelto")

    user = UserRepository(session).get(user_id)
    membership = user.membership_type if user else MEMBERSHIP_STANDARD
    max_renewals = RENEWAL_LIMITS.get(membership, RENEWAL_LIMITS[MEMBERSHIP_STANDARD])
    if transaction.renewal_count >= max_renewals:
        raise ValueError(
            f"Límite de renovaciones alcanzado: la membresía {membership} "
            f"permite hasta {max_renewals} renovaciones"
        )

    now = now_in_app_timezone()
    if transaction.due_date is None or transaction.is_overdue(now):
        raise ValueError("No se pueden renovar libros vencidos; devuelve el libro o paga la multa")

    previous_due = transaction.due_date
    transaction.due_date = previous_due + timedelta(days=RENEWAL_PERIOD_DAYS)
    transaction.renewal_count += 1
    updated = transaction_repository.update(transaction)
    ActivityLogRepository(session).record(
        user_id=user_id,
        action="renew_loan",
        entity_type="transaction",
        entity_id=transaction_id,
        payload={
            "previous_due_date": previous_due.isoformat(),
            "renewal_count": updated.renewal_count,
        },
    )
    session.commit()
    logger.info("Renewed loan %s for user %s (%s)", transaction_id, user_id, updated.renewal_count)
    return RenewalResult(
        transaction=updated,
        renewal_count=updated.renewal_count,
        max_renewals=max_renewals,
    )


def list_active_loans(session: Session, user_id: int) -> list[BorrowedBook]:
    """Return the books ``user_id`` currently has out, soonest due first."""

    now = now_in_app_timezone()
    loans: list[BorrowedBook] = []
    for transaction, _user, book_copy, book in TransactionRepository(
        session
    ).list_active_with_books(user_id):
        overdue = transaction.is_overdue(now)
        loans.append(
            BorrowedBook(
                transaction=transaction,
                book_copy=book_copy,
                book=book,
                is_overdue=overdue,
                days_overdue=days_between(transaction.due_date, now) if overdue else 0,
            )
        )
    return loans


__all__ = [
    "BorrowedBook",
    "RENEWAL_LIMITS",
    "RENEWAL_PERIOD_DAYS",
    "RenewalResult",
    "ReturnResult",
    "calculate_fine",
    "issue_book",
    "list_active_loans",
    "renew_loan",
    "return_book",
]
