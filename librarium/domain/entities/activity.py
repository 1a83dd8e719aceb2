"""Domain entity representing an entry of the activity log."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class ActivityLog:
    """Record of an action performed by a user or by the system."""

    id: int | None
    user_id: int | None
    action: str
    entity_type: str | None
    entity_id: int | None
    payload: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


__all__ = ["ActivityLog"]
