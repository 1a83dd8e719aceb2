"""Use cases for creating user accounts."""

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from librarium.domain.entities import ROLE_MEMBER, User
from librarium.infrastructure.repositories import RoleRepository, UserRepository
from librarium.infrastructure.security import get_password_hash
from librarium.utils import now_in_app_timezone

from .validators import normalize_email, validate_name, validate_password

DEFAULT_MEMBERSHIP_DAYS = 365


def create_user(
    session: Session,
    *,
    name: str,
    role_alias: str,
    email: str,
    password: str,
    membership_expiry: datetime | None = None,
) -> User:
    """Create a new user ensuring unique email addresses."""

    repository = UserRepository(session)
    role_repository = RoleRepository(session)

    cleaned_name = validate_name(name)
    cleaned_email = normalize_email(email)
    validate_password(password)

    if repository.get_by_email(cleaned_email):
        raise ValueError("El correo electrónico ya está registrado")

    role = role_repository.get_by_alias(role_alias)
    if role is None:
        raise ValueError("Rol no encontrado")

    user = User(
        id=None,
        role=role,
        name=cleaned_name,
        email=cleaned_email,
        password=get_password_hash(password),
        membership_expiry=membership_expiry,
        is_active=True,
        last_login=None,
        created_at=now_in_app_timezone(),
    )
    return repository.create(user)


def register_member(session: Session, *, name: str, email: str, password: str) -> User:
    """Self-service sign up: create a ``member`` with a one year membership."""

    expiry = now_in_app_timezone() + timedelta(days=DEFAULT_MEMBERSHIP_DAYS)
    return create_user(
        session,
        name=name,
        role_alias=ROLE_MEMBER,
        email=email,
        password=password,
        membership_expiry=expiry,
    )
