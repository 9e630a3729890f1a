"""Registry error taxonomy.

Every error is a rejected individual call: synchronous, non-retryable,
and raised before any state is written.  ``code`` is the stable name
exposed to API clients and used as the metrics label.
"""

from __future__ import annotations

import logging

from skill_registry.core.metrics import REJECTIONS

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    code = "RegistryError"


# ---- authorization failures ----


class NotOwnerError(RegistryError):
    code = "NotOwner"


class NotAuthorizedIssuerError(RegistryError):
    code = "NotAuthorizedIssuer"


class NotOriginalIssuerError(RegistryError):
    code = "NotOriginalIssuer"


# ---- duplicate / no-op transitions ----


class AlreadyRegisteredError(RegistryError):
    code = "AlreadyRegistered"


class AlreadyInactiveError(RegistryError):
    code = "AlreadyInactive"


# ---- references to nonexistent entities ----


class UnknownIssuerError(RegistryError):
    code = "UnknownIssuer"


class NotFoundError(RegistryError):
    code = "NotFound"


# ---- malformed requests ----


class InvalidInputError(RegistryError, ValueError):
    code = "InvalidInput"


class InvalidLearnerError(InvalidInputError):
    code = "InvalidLearner"


class InvalidSkillNameError(InvalidInputError):
    code = "InvalidSkillName"


class InvalidProficiencyLevelError(InvalidInputError):
    code = "InvalidProficiencyLevel"


def reject(error: RegistryError, *, caller: str | None = None) -> RegistryError:
    """Count and log a rejection, then hand the error back for raising.

    Usage: ``raise reject(NotOwnerError("..."), caller=caller)``
    """
    REJECTIONS.labels(error=error.code).inc()
    logger.warning(
        "Rejected %s caller=%s: %s",
        error.code,
        caller,
        error,
        extra={"caller": caller, "error": error.code},
        stacklevel=2,
    )
    return error
