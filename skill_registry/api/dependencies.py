from __future__ import annotations

import logging
from typing import Annotated

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from skill_registry.core.config import SETTINGS
from skill_registry.models.principal import Principal
from skill_registry.services import token_service
from skill_registry.services.ledger import Ledger

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

# --- Process-wide ledger (in-memory; owner fixed at startup) ---
ledger = Ledger(owner=SETTINGS.registry_owner)


def get_ledger() -> Ledger:
    """Dependency returning the ledger every endpoint runs against.

    Tests override this with a fresh Ledger and a manual clock.
    """
    return ledger


def require_caller(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> Principal:
    """Authenticate the bearer token and return the caller's identity.

    This is the only place caller identity is established; the registry
    services receive ``principal.identity`` and trust it.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = token_service.decode_access_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        logger.warning("Expired token rejected")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid token rejected: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None

    principal = Principal(identity=claims["sub"], token_id=claims.get("jti"))
    logger.debug("Token validated for caller=%s", principal.identity)
    return principal


LedgerDep = Annotated[Ledger, Depends(get_ledger)]
CallerDep = Annotated[Principal, Depends(require_caller)]
