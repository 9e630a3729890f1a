"""Credential issuance, revocation and lookups.

Issuance is the one write that touches four pieces of state: the
credential table, the learner index, the credential counter and the
issuer's ``credentials_issued``.  The repo derives the counter from
the table and updates the learner index in the same append(), so the
service only has two repo writes to make, both after every check has
passed.
"""

from __future__ import annotations

import logging

from skill_registry.core.metrics import CREDENTIALS_ISSUED, CREDENTIALS_REVOKED
from skill_registry.models.credential import (
    MAX_PROFICIENCY,
    MIN_PROFICIENCY,
    NO_EXPIRY,
    Credential,
)
from skill_registry.models.events import CredentialIssued, CredentialRevoked
from skill_registry.services.clock import MAX_TIMESTAMP
from skill_registry.services.errors import (
    AlreadyInactiveError,
    InvalidInputError,
    InvalidLearnerError,
    InvalidProficiencyLevelError,
    InvalidSkillNameError,
    NotAuthorizedIssuerError,
    NotFoundError,
    NotOriginalIssuerError,
    reject,
)
from skill_registry.services.ledger import Ledger

logger = logging.getLogger(__name__)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _expiry_for(now: int, validity_period: int, caller: str) -> int:
    if not _is_int(validity_period) or validity_period < 0:
        raise reject(
            InvalidInputError("validity_period must be a non-negative integer"),
            caller=caller,
        )
    if validity_period == 0:
        return NO_EXPIRY
    # Reject rather than wrap: a wrapped expiry would land before issue_date.
    if validity_period > MAX_TIMESTAMP - now:
        raise reject(
            InvalidInputError("validity_period overflows the timestamp range"),
            caller=caller,
        )
    return now + validity_period


def issue_credential(
    ledger: Ledger,
    caller: str,
    *,
    learner: str,
    skill_name: str,
    description: str = "",
    proficiency_level: int,
    validity_period: int = 0,
    metadata_hash: str = "",
) -> Credential:
    """Issue a credential from ``caller`` to ``learner``.

    validity_period is in seconds; 0 issues a permanent credential.
    Returns the stored credential; its ``id`` is the new counter value.
    """
    with ledger.transaction() as now:
        if not ledger.issuers.is_authorized(caller):
            raise reject(
                NotAuthorizedIssuerError(f"{caller!r} is not an authorized issuer"),
                caller=caller,
            )
        if not learner or not learner.strip():
            raise reject(InvalidLearnerError("learner must be non-empty"), caller=caller)
        if not skill_name or not skill_name.strip():
            raise reject(
                InvalidSkillNameError("skill_name must be non-empty"), caller=caller
            )
        if not _is_int(proficiency_level) or not (
            MIN_PROFICIENCY <= proficiency_level <= MAX_PROFICIENCY
        ):
            raise reject(
                InvalidProficiencyLevelError(
                    f"proficiency_level must be between {MIN_PROFICIENCY} "
                    f"and {MAX_PROFICIENCY} (got {proficiency_level!r})"
                ),
                caller=caller,
            )
        expiry_date = _expiry_for(now, validity_period, caller)

        credential = Credential(
            id=ledger.credentials.count() + 1,
            learner=learner,
            issuer=caller,
            skill_name=skill_name,
            description=description,
            proficiency_level=proficiency_level,
            issue_date=now,
            expiry_date=expiry_date,
            metadata_hash=metadata_hash,
        )
        ledger.credentials.append(credential)
        ledger.issuers.increment_issued(caller)
        ledger.emit(
            CredentialIssued(
                id=credential.id,
                learner=learner,
                issuer=caller,
                skill_name=skill_name,
                proficiency_level=proficiency_level,
            ),
            now,
        )

    CREDENTIALS_ISSUED.inc()
    logger.info(
        "Credential issued  id=%d issuer=%s learner=%s skill=%s level=%d",
        credential.id,
        caller,
        learner,
        skill_name,
        proficiency_level,
        extra={"caller": caller, "credential_id": credential.id},
    )
    return credential


def revoke_credential(
    ledger: Ledger, caller: str, credential_id: int, *, reason: str = ""
) -> Credential:
    """Deactivate a credential.  Only its original issuer may do this.

    The check is against the issuing identity, not the authorized set,
    so an issuer keeps revoke rights over what it issued.
    """
    with ledger.transaction() as now:
        existing = ledger.credentials.get(credential_id)
        if existing is None:
            raise reject(NotFoundError(f"credential {credential_id}"), caller=caller)
        if existing.issuer != caller:
            raise reject(
                NotOriginalIssuerError(
                    f"credential {credential_id} was not issued by {caller!r}"
                ),
                caller=caller,
            )
        if not existing.is_active:
            raise reject(
                AlreadyInactiveError(f"credential {credential_id} already revoked"),
                caller=caller,
            )

        revoked = ledger.credentials.deactivate(credential_id)
        ledger.emit(
            CredentialRevoked(id=credential_id, issuer=caller, reason=reason), now
        )

    CREDENTIALS_REVOKED.inc()
    logger.info(
        "Credential revoked  id=%d issuer=%s reason=%s",
        credential_id,
        caller,
        reason,
        extra={"caller": caller, "credential_id": credential_id},
    )
    return revoked


def get_credential(ledger: Ledger, credential_id: int) -> Credential:
    with ledger.snapshot():
        credential = ledger.credentials.get(credential_id)
    if credential is None:
        raise NotFoundError(f"credential {credential_id}")
    return credential


def get_learner_credentials(ledger: Ledger, learner: str) -> list[int]:
    with ledger.snapshot():
        return ledger.credentials.list_by_learner(learner)


def get_total_credentials(ledger: Ledger) -> int:
    with ledger.snapshot():
        return ledger.credentials.count()
