"""Domain errors raised by the application use cases."""


class NotFoundError(ValueError):
    """Raised when a requested record does not exist."""


class PermissionDeniedError(ValueError):
    """Raised when the acting user does not own the targeted record."""


__all__ = ["NotFoundError", "PermissionDeniedError"]
