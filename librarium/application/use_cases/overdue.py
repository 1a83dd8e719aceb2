"""Use cases around loans that are past their due date."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from librarium.domain.entities import Notification, OverdueTransaction
from librarium.infrastructure.email import send_overdue_reminder_email
from librarium.infrastructure.repositories import TransactionRepository
from librarium.infrastructure.spreadsheets import SpreadsheetFile, build_overdue_report
from librarium.utils import days_between, now_in_app_timezone

from .notifications import publish_notifications, stage_overdue_reminder

logger = logging.getLogger(__name__)


def list_overdue_transactions(
    session: Session, *, reference: datetime | None = None
) -> list[OverdueTransaction]:
    """Return every unreturned loan whose due date has passed, oldest first."""

    now = reference or now_in_app_timezone()
    return [
        OverdueTransaction(
            transaction=transaction,
            user=user,
            book_copy=book_copy,
            book=book,
            days_overdue=days_between(transaction.due_date, now),
        )
        for transaction, user, book_copy, book in TransactionRepository(
            session
        ).list_overdue(now)
    ]


def export_overdue_report(
    session: Session, *, reference: datetime | None = None
) -> SpreadsheetFile:
    """Build an Excel workbook with the current overdue loans."""

    now = reference or now_in_app_timezone()
    records = list_overdue_transactions(session, reference=now)
    return build_overdue_report(records, generated_at=now)


def send_overdue_reminders(session: Session, *, reference: datetime | None = None) -> int:
    """Notify every member with an overdue loan; return how many were notified."""

    records = [
        record
        for record in list_overdue_transactions(session, reference=reference)
        if record.user is not None
    ]
    staged: list[Notification] = [
        stage_overdue_reminder(
            session,
            user_id=record.user.id,
            transaction_id=record.transaction.id,
            book=record.book,
            days_overdue=record.days_overdue,
        )
        for record in records
    ]
    session.commit()
    publish_notifications(staged)

    for record in records:
        if not send_overdue_reminder_email(
            record.user.email,
            name=record.user.name,
            book_title=record.book.title if record.book else "",
            days_overdue=record.days_overdue,
        ):
            logger.info("Overdue reminder email not delivered for transaction %s", record.transaction.id)

    return len(staged)


__all__ = ["export_overdue_report", "list_overdue_transactions", "send_overdue_reminders"]
