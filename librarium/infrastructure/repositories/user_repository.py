"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session, joinedload

from librarium.domain.entities import MEMBERSHIP_STANDARD, Role, User
from librarium.infrastructure.models import UserModel
from librarium.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email.lower())
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self._get_model(id=user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, **filters) -> UserModel | None:
        query = self.session.query(UserModel).options(joinedload(UserModel.role))
        return query.filter_by(**filters).first()

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.role_id = user.role.id
        model.name = user.name
        model.email = user.email.lower()
        model.password = user.password
        model.membership_expiry = ensure_app_naive_datetime(user.membership_expiry)
        model.membership_type = user.membership_type
        model.is_active = user.is_active
        model.last_login = ensure_app_naive_datetime(user.last_login)
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=UserRepository._role_to_entity(model.role),
            name=model.name,
            email=model.email,
            password=model.password,
            membership_expiry=ensure_app_timezone(model.membership_expiry),
            is_active=model.is_active,
            last_login=ensure_app_timezone(model.last_login),
            created_at=ensure_app_timezone(model.created_at),
            membership_type=model.membership_type or MEMBERSHIP_STANDARD,
        )

    @staticmethod
    def _role_to_entity(model_role) -> Role:
        if model_role is None:
            msg = "User role is not set"
            raise ValueError(msg)
        return Role(id=model_role.id, name=model_role.name, alias=model_role.alias)


__all__ = ["UserRepository"]
