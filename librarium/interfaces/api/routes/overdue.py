"""Rutas administrativas para préstamos vencidos."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from librarium.application.use_cases.overdue import (
    export_overdue_report,
    list_overdue_transactions,
    send_overdue_reminders,
)
from librarium.domain.entities import User
from librarium.infrastructure.database import get_db
from librarium.interfaces.api.dependencies import require_staff
from librarium.interfaces.api.schemas import OverdueReminderResponse, OverdueTransactionRead

router = APIRouter(prefix="/admin/overdue", tags=["overdue"])


@router.get("", response_model=list[OverdueTransactionRead])
def read_overdue_transactions(
    db: Session = Depends(get_db),
    _: User = Depends(require_staff),
):
    """Lista los préstamos sin devolver cuya fecha de vencimiento ya pasó."""

    return [
        OverdueTransactionRead.model_validate(record)
        for record in list_overdue_transactions(db)
    ]


@router.get("/export")
def export_overdue_transactions(
    db: Session = Depends(get_db),
    _: User = Depends(require_staff),
) -> Response:
    """Descarga los préstamos vencidos en un archivo de Excel."""

    report = export_overdue_report(db)
    return Response(
        content=report.content,
        media_type=report.content_type,
        headers={"Content-Disposition": f'attachment; filename="{report.filename}"'},
    )


@router.post("/notify", response_model=OverdueReminderResponse)
def notify_overdue_members(
    db: Session = Depends(get_db),
    _: User = Depends(require_staff),
):
    """Envía un recordatorio a cada socio con préstamos vencidos."""

    return OverdueReminderResponse(notified=send_overdue_reminders(db))
