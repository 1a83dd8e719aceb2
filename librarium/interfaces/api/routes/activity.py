"""Endpoints con la actividad reciente de la biblioteca."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from librarium.application.use_cases.activity import get_recent_activity
from librarium.domain.entities import User
from librarium.infrastructure.database import get_db
from librarium.interfaces.api.dependencies import require_staff
from librarium.interfaces.api.schemas import ActivityLogRead

router = APIRouter(prefix="/admin/activity", tags=["activity"])


@router.get("", response_model=list[ActivityLogRead])
def read_recent_activity(
    entity_type: str | None = Query(None, max_length=50, description="Filtra por tipo de entidad"),
    limit: int = Query(20, ge=1, le=100, description="Número máximo de eventos a retornar"),
    db: Session = Depends(get_db),
    _: User = Depends(require_staff),
) -> list[ActivityLogRead]:
    """Devuelve los eventos más recientes del registro de actividad."""

    events = get_recent_activity(db, entity_type=entity_type, limit=limit)
    return [ActivityLogRead.model_validate(event) for event in events]


__all__ = ["router"]
