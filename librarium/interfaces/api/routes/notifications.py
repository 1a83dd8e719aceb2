"""Endpoints and websocket handler for member notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from librarium.application.use_cases.notifications import (
    DEFAULT_NOTIFICATION_LIMIT,
    acknowledge_notifications,
    delete_notification as delete_notification_uc,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    set_notification_read_state,
)
from librarium.domain.entities import Notification, User
from librarium.infrastructure.database import get_db
from librarium.infrastructure.notifications import notification_manager, serialize_notification
from librarium.infrastructure.repositories import NotificationRepository
from librarium.interfaces.api.dependencies import get_current_active_user, resolve_current_user
from librarium.interfaces.api.routes_helpers import parse_identifier, to_http_exception
from librarium.interfaces.api.schemas import (
    NotificationListResponse,
    NotificationRead,
    NotificationUpdate,
    SuccessResponse,
)

INVALID_NOTIFICATION_ID = "ID de notificación inválido"

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    unread: bool = Query(False, description="Solo notificaciones sin leer"),
    limit: int = Query(DEFAULT_NOTIFICATION_LIMIT, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Devuelve las notificaciones más recientes del usuario autenticado."""

    feed = list_notifications_uc(db, current_user.id, unread_only=unread, limit=limit)
    return NotificationListResponse(
        notifications=[_notification_to_schema(item) for item in feed.notifications],
        unread_count=feed.unread_count,
    )


@router.post("/mark-all-read", response_model=SuccessResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Marca como leídas todas las notificaciones del usuario autenticado."""

    updated = mark_all_notifications_read(db, current_user.id)
    logger.debug("Marked %s notifications as read for user %s", updated, current_user.id)
    return SuccessResponse(success=True)


@router.patch("/{notification_id}", response_model=NotificationRead)
def update_notification(
    notification_id: str,
    payload: NotificationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Cambia el estado de lectura de una notificación propia."""

    identifier = parse_identifier(notification_id, INVALID_NOTIFICATION_ID)
    try:
        notification = set_notification_read_state(
            db, identifier, user_id=current_user.id, is_read=payload.is_read
        )
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return _notification_to_schema(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    """Elimina una notificación propia."""

    identifier = parse_identifier(notification_id, INVALID_NOTIFICATION_ID)
    try:
        delete_notification_uc(db, identifier, user_id=current_user.id)
    except ValueError as exc:
        raise to_http_exception(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    database = websocket.app.state.database
    session = database.session()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Usuario inactivo")
        pending_notifications = NotificationRepository(session).list_unread_for_user(user.id)
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return
    finally:
        session.close()

    await notification_manager.connect(user.id, websocket)
    try:
        await websocket.send_json(
            {
                "type": "init",
                "data": [serialize_notification(item) for item in pending_notifications],
            }
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except (KeyError, ValueError):
                logger.debug("Ignoring malformed websocket frame from user %s", user.id)
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ack_session = database.session()
                    try:
                        acknowledge_notifications(ack_session, ids, user_id=user.id)
                    finally:
                        ack_session.close()
    except WebSocketDisconnect:
        logger.debug("Notification websocket closed for user %s", user.id)
    finally:
        notification_manager.disconnect(user.id, websocket)
