"""Endpoints relacionados con autenticación y registro de socios."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from librarium.application.use_cases.users import (
    AuthenticationStatus,
    authenticate_user,
    record_login,
    register_member,
)
from librarium.infrastructure.database import get_db
from librarium.infrastructure.security import create_access_token
from librarium.interfaces.api.schemas import RegisterRequest, Token, UserRead

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


# Nota: se conserva la firma esperada por OAuth2PasswordRequestForm.
@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """Autentica al usuario por correo electrónico y devuelve un token JWT."""

    user, auth_status = authenticate_user(db, form_data.username, form_data.password)

    if auth_status is AuthenticationStatus.INVALID_CREDENTIALS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales incorrectas",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if auth_status is AuthenticationStatus.INACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Usuario inactivo",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(data={"sub": user.email, "role": user.role.alias})
    record_login(db, user.id)
    return {"access_token": access_token, "token_type": "bearer", "role": user.role.alias}


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """Registra un nuevo socio de la biblioteca."""

    try:
        user = register_member(
            db, name=payload.name, email=payload.email, password=payload.password
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("Registered member %s", user.id)
    return UserRead.model_validate(user)
