"""Persistence helpers for roles."""

from __future__ import annotations

from sqlalchemy.orm import Session

from librarium.domain.entities import (
    ROLE_ADMIN,
    ROLE_DIRECTOR,
    ROLE_MEMBER,
    ROLE_STAFF,
    Role,
)
from librarium.infrastructure.models import RoleModel

DEFAULT_ROLES: dict[str, str] = {
    ROLE_MEMBER: "Member",
    ROLE_STAFF: "Staff",
    ROLE_ADMIN: "Administrator",
    ROLE_DIRECTOR: "Director",
}


class RoleRepository:
    """Provide read access to roles and seed the default ones."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_alias(self, alias: str) -> Role | None:
        model = (
            self.session.query(RoleModel)
            .filter(RoleModel.alias == alias.lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_aliases(self) -> set[str]:
        return {alias.lower() for (alias,) in self.session.query(RoleModel.alias).all()}

    def ensure_defaults(self) -> None:
        """Insert any of the default roles that are missing."""

        existing = self.list_aliases()
        missing = [alias for alias in DEFAULT_ROLES if alias not in existing]
        if not missing:
            return
        for alias in missing:
            self.session.add(RoleModel(name=DEFAULT_ROLES[alias], alias=alias))
        self.session.commit()

    @staticmethod
    def _to_entity(model: RoleModel) -> Role:
        return Role(id=model.id, name=model.name, alias=model.alias)


__all__ = ["DEFAULT_ROLES", "RoleRepository"]
