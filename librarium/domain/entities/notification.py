"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_DUE_SOON = "due_soon"
NOTIFICATION_OVERDUE = "overdue"
NOTIFICATION_FINE_ADDED = "fine_added"
NOTIFICATION_RESERVATION_READY = "reservation_ready"
NOTIFICATION_GENERAL = "general"


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    type: str
    title: str
    message: str
    link: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None


__all__ = [
    "NOTIFICATION_DUE_SOON",
    "NOTIFICATION_FINE_ADDED",
    "NOTIFICATION_GENERAL",
    "NOTIFICATION_OVERDUE",
    "NOTIFICATION_RESERVATION_READY",
    "Notification",
]
