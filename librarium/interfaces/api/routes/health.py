"""Endpoint de salud usado por los orquestadores para las sondas de disponibilidad."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from librarium.infrastructure.database import Database, get_database
from librarium.interfaces.api.schemas import HealthRead
from librarium.utils import now_in_app_timezone

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get(
    "/health",
    response_model=HealthRead,
    response_model_exclude_none=True,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": HealthRead}},
)
def health_check(database: Database = Depends(get_database)):
    """Ejecuta una consulta trivial contra la base de datos y reporta el estado."""

    try:
        database.ping()
    except Exception as exc:
        logger.exception("Health check failed")
        payload = HealthRead(
            status="unhealthy",
            timestamp=now_in_app_timezone(),
            database="disconnected",
            error=str(exc) or exc.__class__.__name__,
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=payload.model_dump(mode="json"),
        )

    return HealthRead(
        status="healthy",
        timestamp=now_in_app_timezone(),
        database="connected",
    )
