"""Validation helpers shared by the user use cases."""

MIN_PASSWORD_LENGTH = 8


def validate_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("El nombre es obligatorio")
    if len(cleaned) > 100:
        raise ValueError("El nombre no puede superar los 100 caracteres")
    return cleaned


def normalize_email(email: str) -> str:
    cleaned = (email or "").strip().lower()
    if "@" not in cleaned:
        raise ValueError("El correo electrónico no es válido")
    return cleaned


def validate_password(password: str) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"La contraseña debe tener al menos {MIN_PASSWORD_LENGTH} caracteres"
        )


__all__ = ["MIN_PASSWORD_LENGTH", "normalize_email", "validate_name", "validate_password"]
