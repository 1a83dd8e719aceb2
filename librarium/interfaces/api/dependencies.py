"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from librarium.domain.entities import User
from librarium.infrastructure.database import get_db
from librarium.infrastructure.repositories import UserRepository
from librarium.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def _credentials_exception(detail: str = "Credenciales inválidas") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    email = payload.get("sub")
    if not isinstance(email, str) or not email:
        raise _credentials_exception()

    user = UserRepository(db).get_by_email(email)
    if user is None:
        raise _credentials_exception("Usuario no encontrado")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    return resolve_current_user(token, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuario inactivo",
        )
    return current_user


def require_staff(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user is staff, administrator or director."""

    if not current_user.can_access_admin():
        raise _credentials_exception("No autorizado")
    return current_user
