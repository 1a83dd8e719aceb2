"""Domain entity representing a user role."""

from dataclasses import dataclass

ROLE_MEMBER = "member"
ROLE_STAFF = "staff"
ROLE_ADMIN = "admin"
ROLE_DIRECTOR = "director"

ADMIN_ROLE_ALIASES = frozenset({ROLE_STAFF, ROLE_ADMIN, ROLE_DIRECTOR})


@dataclass
class Role:
    """Core attributes describing a role that can be assigned to a user."""

    id: int
    name: str
    alias: str


__all__ = [
    "ADMIN_ROLE_ALIASES",
    "ROLE_ADMIN",
    "ROLE_DIRECTOR",
    "ROLE_MEMBER",
    "ROLE_STAFF",
    "Role",
]
