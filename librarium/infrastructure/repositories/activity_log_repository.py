"""Persistence layer for activity log records."""

from __future__ import annotations

from typing import Any, Iterable

from sqlalchemy.orm import Session

from librarium.domain.entities import ActivityLog
from librarium.infrastructure.models import ActivityLogModel
from librarium.utils import ensure_app_timezone


class ActivityLogRepository:
    """Append and read :class:`ActivityLog` entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def record(
        self,
        *,
        user_id: int | None,
        action: str,
        entity_type: str | None = None,
        entity_id: int | None = None,
        payload: dict[str, Any] | None = None,
    ) -> None:
        """Stage a new entry; the caller's transaction commits it."""

        self.session.add(
            ActivityLogModel(
                user_id=user_id,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                payload=payload or {},
            )
        )

    def list(self, *, entity_type: str | None = None, limit: int = 100) -> list[ActivityLog]:
        query = self.session.query(ActivityLogModel)
        if entity_type is not None:
            query = query.filter(ActivityLogModel.entity_type == entity_type)

        models: Iterable[ActivityLogModel] = (
            query.order_by(ActivityLogModel.id.desc()).limit(limit).all()
        )
        return [self._to_entity(model) for model in models]

    @staticmethod
    def _to_entity(model: ActivityLogModel) -> ActivityLog:
        return ActivityLog(
            id=model.id,
            user_id=model.user_id,
            action=model.action,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            payload=dict(model.payload or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ActivityLogRepository"]
