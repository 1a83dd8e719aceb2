"""Use cases for managing users."""

from .authenticate_user import AuthenticationStatus, authenticate_user
from .create_user import DEFAULT_MEMBERSHIP_DAYS, create_user, register_member
from .record_login import record_login

__all__ = [
    "AuthenticationStatus",
    "DEFAULT_MEMBERSHIP_DAYS",
    "authenticate_user",
    "create_user",
    "record_login",
    "register_member",
]
