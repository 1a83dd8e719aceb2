"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from librarium.domain.exceptions import NotFoundError, PermissionDeniedError


def parse_identifier(raw: str, detail: str) -> int:
    """Return ``raw`` as a positive integer or raise a 400 with ``detail``.

    Path identifiers are declared as ``str`` so malformed values are rejected
    here, before any database work, with a message specific to the resource.
    """

    value = raw.strip()
    if not (value.isascii() and value.isdigit()) or int(value) < 1:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    return int(value)


def to_http_exception(exc: ValueError) -> HTTPException:
    """Map a domain error onto the matching HTTP status code."""

    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, PermissionDeniedError):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(exc))
