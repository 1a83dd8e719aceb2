"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RoleRead(BaseModel):
    id: int
    name: str
    alias: str

    model_config = ConfigDict(from_attributes=True)


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    membership_expiry: datetime | None
    membership_type: str
    last_login: datetime | None
    created_at: datetime | None
    is_active: bool
    role: RoleRead

    model_config = ConfigDict(from_attributes=True)
