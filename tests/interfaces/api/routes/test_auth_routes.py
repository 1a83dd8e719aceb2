"""Tests for the authentication and registration endpoints."""

from __future__ import annotations

from librarium.infrastructure.models import UserModel
from librarium.infrastructure.security import decode_access_token

PASSWORD = "Secret123"


def _login(client, email: str, password: str = PASSWORD):
    return client.post("/api/auth/token", data={"username": email, "password": password})


def test_login_returns_token_with_role(client, db_session, make_user) -> None:
    user = make_user("staff", email="bibliotecaria@example.com")

    response = _login(client, "bibliotecaria@example.com")

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["role"] == "staff"
    payload = decode_access_token(body["access_token"])
    assert payload["sub"] == "bibliotecaria@example.com"
    assert payload["role"] == "staff"

    db_session.expire_all()
    assert db_session.get(UserModel, user.id).last_login is not None


def test_login_rejects_wrong_password(client, make_user) -> None:
    make_user(email="socio@example.com")

    response = _login(client, "socio@example.com", "incorrecta")

    assert response.status_code == 401
    assert response.json()["detail"] == "Credenciales incorrectas"
    assert response.headers["www-authenticate"] == "Bearer"


def test_login_rejects_unknown_email(client) -> None:
    assert _login(client, "nadie@example.com").status_code == 401


def test_login_rejects_inactive_user(client, make_user) -> None:
    make_user(email="baja@example.com", is_active=False)

    response = _login(client, "baja@example.com")

    assert response.status_code == 403
    assert response.json()["detail"] == "Usuario inactivo"


def test_register_creates_member_that_can_log_in(client, headers_for) -> None:
    response = client.post(
        "/api/auth/register",
        json={"name": "Julia Lectora", "email": "julia@example.com", "password": "Lectura2024"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["role"]["alias"] == "member"
    assert body["membership_expiry"] is not None
    assert "password" not in body

    token = _login(client, "julia@example.com", "Lectura2024").json()["access_token"]
    me = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "julia@example.com"


def test_register_rejects_duplicate_email(client, make_user) -> None:
    make_user(email="repetido@example.com")

    response = client.post(
        "/api/auth/register",
        json={"name": "Otra Persona", "email": "repetido@example.com", "password": "Lectura2024"},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "El correo electrónico ya está registrado"


def test_register_rejects_short_password(client) -> None:
    response = client.post(
        "/api/auth/register",
        json={"name": "Corta", "email": "corta@example.com", "password": "123"},
    )

    assert response.status_code == 422


def test_me_requires_token(client) -> None:
    assert client.get("/api/users/me").status_code == 401
