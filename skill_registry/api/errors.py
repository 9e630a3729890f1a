"""Translate registry errors into HTTP responses.

Endpoints catch RegistryError and re-raise through to_http_exception()
so every route reports the same status code and body shape for the
same failure:

    {"detail": {"error": "NotOriginalIssuer", "message": "..."}}
"""

from __future__ import annotations

from fastapi import HTTPException, status

from skill_registry.services.errors import (
    AlreadyInactiveError,
    AlreadyRegisteredError,
    InvalidInputError,
    NotAuthorizedIssuerError,
    NotFoundError,
    NotOriginalIssuerError,
    NotOwnerError,
    RegistryError,
    UnknownIssuerError,
)

_STATUS_BY_ERROR: tuple[tuple[type[RegistryError], int], ...] = (
    (NotOwnerError, status.HTTP_403_FORBIDDEN),
    (NotAuthorizedIssuerError, status.HTTP_403_FORBIDDEN),
    (NotOriginalIssuerError, status.HTTP_403_FORBIDDEN),
    (UnknownIssuerError, status.HTTP_404_NOT_FOUND),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AlreadyRegisteredError, status.HTTP_409_CONFLICT),
    (AlreadyInactiveError, status.HTTP_409_CONFLICT),
    # Starlette renamed the 422 constant; the literal works on every release.
    (InvalidInputError, 422),
)


def to_http_exception(exc: RegistryError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    return HTTPException(
        status_code=status_code,
        detail={"error": exc.code, "message": str(exc)},
    )
