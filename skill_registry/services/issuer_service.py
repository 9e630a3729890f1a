from __future__ import annotations

import logging

from skill_registry.core.metrics import ISSUERS_AUTHORIZED, ISSUERS_REGISTERED
from skill_registry.models.events import IssuerAuthorized, IssuerRegistered
from skill_registry.models.issuer import Issuer
from skill_registry.services.errors import (
    AlreadyRegisteredError,
    InvalidInputError,
    NotOwnerError,
    UnknownIssuerError,
    reject,
)
from skill_registry.services.ledger import Ledger

logger = logging.getLogger(__name__)


def require_identity(caller: str) -> str:
    if not caller or not caller.strip():
        raise reject(InvalidInputError("caller identity must be non-empty"))
    return caller


def register_issuer(
    ledger: Ledger, caller: str, *, name: str, organization: str
) -> Issuer:
    """Self-register ``caller`` as an issuer, pending owner authorization."""
    require_identity(caller)
    name = name.strip()
    organization = organization.strip()

    if not name:
        raise reject(InvalidInputError("name must be non-empty"), caller=caller)
    if not organization:
        raise reject(
            InvalidInputError("organization must be non-empty"), caller=caller
        )

    with ledger.transaction() as now:
        if ledger.issuers.get(caller) is not None:
            raise reject(AlreadyRegisteredError(caller), caller=caller)

        issuer = Issuer.new(
            address=caller, name=name, organization=organization, now=now
        )
        ledger.issuers.add(issuer)
        ledger.emit(
            IssuerRegistered(identity=caller, name=name, organization=organization),
            now,
        )

    ISSUERS_REGISTERED.inc()
    logger.info(
        "Issuer registered  issuer=%s organization=%s",
        caller,
        organization,
        extra={"caller": caller},
    )
    return issuer


def authorize_issuer(ledger: Ledger, caller: str, issuer_address: str) -> Issuer:
    """Owner-only: mark a registered issuer verified and authorized."""
    if caller != ledger.owner:
        raise reject(
            NotOwnerError("only the registry owner may authorize issuers"),
            caller=caller,
        )

    with ledger.transaction() as now:
        existing = ledger.issuers.get(issuer_address)
        if existing is None:
            raise reject(UnknownIssuerError(issuer_address), caller=caller)
        if existing.is_verified:
            logger.debug("Issuer already authorized  issuer=%s", issuer_address)
            return existing

        # Flag and set membership change in the same repo call.
        issuer = ledger.issuers.authorize(issuer_address)
        ledger.emit(IssuerAuthorized(identity=issuer_address), now)

    ISSUERS_AUTHORIZED.inc()
    logger.info(
        "Issuer authorized  issuer=%s",
        issuer_address,
        extra={"caller": caller},
    )
    return issuer


def get_issuer(ledger: Ledger, address: str) -> Issuer:
    with ledger.snapshot():
        issuer = ledger.issuers.get(address)
    if issuer is None:
        raise UnknownIssuerError(address)
    return issuer


def is_authorized_issuer(ledger: Ledger, address: str) -> bool:
    with ledger.snapshot():
        return ledger.issuers.is_authorized(address)
