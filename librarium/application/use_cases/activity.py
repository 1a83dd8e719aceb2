"""Use case exposing the staff activity feed."""

from __future__ import annotations

from sqlalchemy.orm import Session

from librarium.domain.entities import ActivityLog
from librarium.infrastructure.repositories import ActivityLogRepository


def get_recent_activity(
    session: Session, *, entity_type: str | None = None, limit: int = 20
) -> list[ActivityLog]:
    """Return the newest activity log entries, optionally for one entity type."""

    return ActivityLogRepository(session).list(entity_type=entity_type, limit=limit)


__all__ = ["get_recent_activity"]
