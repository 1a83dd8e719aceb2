"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

from .role import ADMIN_ROLE_ALIASES, ROLE_ADMIN, Role

MEMBERSHIP_STANDARD = "standard"
MEMBERSHIP_PREMIUM = "premium"
MEMBERSHIP_STUDENT = "student"


@dataclass
class User:
    """Core attributes describing a library member or staff account."""

    id: int | None
    role: Role
    name: str
    email: str
    password: str
    membership_expiry: datetime | None
    is_active: bool
    last_login: datetime | None
    created_at: datetime | None
    membership_type: str = MEMBERSHIP_STANDARD

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role alias matches ``alias``."""

        return self.role.alias.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ROLE_ADMIN)

    def can_access_admin(self) -> bool:
        """Return ``True`` for staff, administrators and directors."""

        return self.role.alias.lower() in ADMIN_ROLE_ALIASES

    def membership_expired(self, reference: datetime) -> bool:
        """Return ``True`` when the membership ended before ``reference``."""

        return self.membership_expiry is not None and self.membership_expiry < reference


__all__ = [
    "MEMBERSHIP_PREMIUM",
    "MEMBERSHIP_STANDARD",
    "MEMBERSHIP_STUDENT",
    "User",
]
