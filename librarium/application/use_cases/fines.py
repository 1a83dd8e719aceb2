"""Use cases for reviewing and waiving member fines."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy.orm import Session

from librarium.domain.entities import (
    FINE_STATUS_PAID,
    FINE_STATUS_PENDING,
    FINE_STATUS_WAIVED,
    FINE_STATUSES,
    Book,
    Fine,
    Transaction,
    User,
)
from librarium.domain.exceptions import NotFoundError
from librarium.infrastructure.repositories import ActivityLogRepository, FineRepository

logger = logging.getLogger(__name__)


@dataclass
class FineDetail:
    fine: Fine
    user: User | None
    transaction: Transaction | None


@dataclass
class FineStatusTotals:
    count: int = 0
    amount: Decimal = Decimal("0.00")


@dataclass
class FineStats:
    pending: FineStatusTotals = field(default_factory=FineStatusTotals)
    paid: FineStatusTotals = field(default_factory=FineStatusTotals)
    waived: FineStatusTotals = field(default_factory=FineStatusTotals)


@dataclass
class MemberFine:
    fine: Fine
    transaction: Transaction | None
    book: Book | None


@dataclass
class MemberFineSummary:
    total_pending: Decimal
    total_paid: Decimal
    pending_count: int
    paid_count: int
    waived_count: int


@dataclass
class MemberFines:
    fines: list[MemberFine]
    summary: MemberFineSummary


def _validate_status(status: str | None) -> str | None:
    if status is None:
        return None
    cleaned = status.strip().lower()
    if cleaned not in FINE_STATUSES:
        raise ValueError(f"Estado de multa inválido. Usa uno de: {', '.join(FINE_STATUSES)}")
    return cleaned


def list_fines(session: Session, *, status: str | None = None) -> list[FineDetail]:
    """Return every fine with its member and loan, optionally for one status."""

    rows = FineRepository(session).list_with_members(status=_validate_status(status))
    return [
        FineDetail(fine=fine, user=user, transaction=transaction)
        for fine, user, transaction in rows
    ]


def get_fine_stats(session: Session) -> FineStats:
    """Count fines and add up their amounts per status."""

    totals = FineRepository(session).totals_by_status()
    stats = FineStats()
    for status in FINE_STATUSES:
        if status in totals:
            count, amount = totals[status]
            setattr(stats, status, FineStatusTotals(count=count, amount=amount))
    return stats


def waive_fine(session: Session, *, fine_id: int, waived_by: int | None = None) -> Fine:
    """Cancel the debt of a pending fine.

    Waiving an already waived fine returns it unchanged. Paid fines cannot be
    waived.
    """

    repository = FineRepository(session)
    fine = repository.get(fine_id)
    if fine is None:
        raise NotFoundError("Multa no encontrada")
    if fine.status == FINE_STATUS_WAIVED:
        return fine
    if fine.status == FINE_STATUS_PAID:
        raise ValueError("La multa ya fue pagada y no puede condonarse")

    waived = repository.set_status(fine_id, FINE_STATUS_WAIVED)
    ActivityLogRepository(session).record(
        user_id=waived_by,
        action="waive_fine",
        entity_type="fine",
        entity_id=fine_id,
        payload={"user_id": fine.user_id, "amount": str(fine.amount)},
    )
    session.commit()
    logger.info("Fine %s waived by user %s", fine_id, waived_by)
    return waived


def list_member_fines(session: Session, user_id: int) -> MemberFines:
    """Return the fines of ``user_id`` with the borrowed book and a summary."""

    items = [
        MemberFine(fine=fine, transaction=transaction, book=book)
        for fine, transaction, book in FineRepository(session).list_for_user_with_books(user_id)
    ]
    pending = [item.fine for item in items if item.fine.status == FINE_STATUS_PENDING]
    paid = [item.fine for item in items if item.fine.status == FINE_STATUS_PAID]
    summary = MemberFineSummary(
        total_pending=sum((fine.amount for fine in pending), Decimal("0.00")),
        total_paid=sum((fine.amount for fine in paid), Decimal("0.00")),
        pending_count=len(pending),
        paid_count=len(paid),
        waived_count=sum(1 for item in items if item.fine.status == FINE_STATUS_WAIVED),
    )
    return MemberFines(fines=items, summary=summary)


__all__ = [
    "FineDetail",
    "FineStats",
    "FineStatusTotals",
    "MemberFine",
    "MemberFineSummary",
    "MemberFines",
    "get_fine_stats",
    "list_fines",
    "list_member_fines",
    "waive_fine",
]
