"""Health check schema."""

from datetime import datetime

from pydantic import BaseModel


class HealthRead(BaseModel):
    status: str
    timestamp: datetime
    database: str
    error: str | None = None
