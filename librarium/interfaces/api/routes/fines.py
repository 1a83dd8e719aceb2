"""Rutas de multas: consulta y condonación por el personal y resumen del socio."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from librarium.application.use_cases.fines import (
    get_fine_stats,
    list_fines,
    list_member_fines,
    waive_fine as waive_fine_uc,
)
from librarium.domain.entities import User
from librarium.infrastructure.database import get_db
from librarium.interfaces.api.dependencies import get_current_active_user, require_staff
from librarium.interfaces.api.routes_helpers import parse_identifier, to_http_exception
from librarium.interfaces.api.schemas import (
    FineDetailRead,
    FineRead,
    FineStatsRead,
    MemberFinesResponse,
)

INVALID_FINE_ID = "ID de multa inválido"

router = APIRouter(prefix="/admin/fines", tags=["fines"])
member_router = APIRouter(prefix="/member", tags=["fines"])


@router.get("", response_model=list[FineDetailRead])
def read_fines(
    status_filter: str | None = Query(
        None, alias="status", description="pending, paid o waived"
    ),
    db: Session = Depends(get_db),
    _: User = Depends(require_staff),
):
    """Lista todas las multas con el socio y el préstamo que las originó."""

    try:
        fines = list_fines(db, status=status_filter)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return [FineDetailRead.model_validate(item) for item in fines]


@router.get("/stats", response_model=FineStatsRead)
def read_fine_stats(
    db: Session = Depends(get_db),
    _: User = Depends(require_staff),
):
    """Devuelve la cantidad y el monto total de multas por estado."""

    return FineStatsRead.model_validate(get_fine_stats(db))


@router.put("/{fine_id}/waive", response_model=FineRead)
def waive_fine(
    fine_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_staff),
):
    """Condona una multa pendiente."""

    identifier = parse_identifier(fine_id, INVALID_FINE_ID)
    try:
        fine = waive_fine_uc(db, fine_id=identifier, waived_by=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return FineRead.model_validate(fine)


@member_router.get("/fines", response_model=MemberFinesResponse)
def read_my_fines(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Devuelve las multas del usuario autenticado junto con sus totales."""

    return MemberFinesResponse.model_validate(list_member_fines(db, current_user.id))


__all__ = ["member_router", "router"]
