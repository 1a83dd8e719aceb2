"""Rutas de préstamos: emisión, devolución, renovación y libros prestados del socio."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from librarium.application.use_cases.loans import (
    issue_book as issue_book_uc,
    list_active_loans,
    renew_loan,
    return_book as return_book_uc,
)
from librarium.domain.entities import User
from librarium.infrastructure.database import get_db
from librarium.interfaces.api.dependencies import get_current_active_user, require_staff
from librarium.interfaces.api.routes_helpers import to_http_exception
from librarium.interfaces.api.schemas import (
    BorrowedBookRead,
    FineRead,
    IssueBookRequest,
    RenewLoanRequest,
    RenewLoanResponse,
    ReturnBookRequest,
    ReturnBookResponse,
    TransactionRead,
)

router = APIRouter(prefix="/admin/transactions", tags=["transactions"])
member_router = APIRouter(prefix="/member", tags=["transactions"])


@router.post("/issue", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
def issue_book(
    payload: IssueBookRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Presta un ejemplar disponible a un socio."""

    try:
        transaction = issue_book_uc(
            db,
            user_id=payload.user_id,
            book_copy_id=payload.book_copy_id,
            due_date=payload.due_date,
            notes=payload.notes,
            issued_by=current_user.id,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return TransactionRead.model_validate(transaction)


@router.post("/return", response_model=ReturnBookResponse)
def return_book(
    payload: ReturnBookRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Registra la devolución de un préstamo y calcula la multa por retraso."""

    try:
        result = return_book_uc(
            db,
            transaction_id=payload.transaction_id,
            notes=payload.notes,
            returned_to=current_user.id,
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return ReturnBookResponse(
        transaction=TransactionRead.model_validate(result.transaction),
        fine=FineRead.model_validate(result.fine) if result.fine else None,
        overdue_days=result.overdue_days,
        fine_amount=result.fine_amount,
    )


@member_router.get("/borrowed", response_model=list[BorrowedBookRead])
def read_borrowed_books(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Devuelve los libros que el usuario autenticado tiene prestados."""

    return [BorrowedBookRead.model_validate(loan) for loan in list_active_loans(db, current_user.id)]


@member_router.post("/renew", response_model=RenewLoanResponse)
def renew_borrowed_book(
    payload: RenewLoanRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Extiende el plazo de un préstamo vigente del usuario autenticado."""

    try:
        result = renew_loan(db, transaction_id=payload.transaction_id, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return RenewLoanResponse(
        transaction=TransactionRead.model_validate(result.transaction),
        new_due_date=result.transaction.due_date,
        renewal_count=result.renewal_count,
        max_renewals=result.max_renewals,
        renewals_remaining=result.renewals_remaining,
    )
