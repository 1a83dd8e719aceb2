"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    type: str
    title: str
    message: str
    link: str | None = None
    payload: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class NotificationListResponse(BaseModel):
    notifications: list[NotificationRead]
    unread_count: int


class NotificationUpdate(BaseModel):
    is_read: bool

    model_config = ConfigDict(extra="forbid")


class SuccessResponse(BaseModel):
    success: bool = True


__all__ = [
    "NotificationListResponse",
    "NotificationRead",
    "NotificationUpdate",
    "SuccessResponse",
]
