"""Public credential verification.

Validity is re-derived on every call from live state:

    is_valid = is_active
               and (permanent or now <= expiry_date)
               and issuer is in the authorized set
               and issuer.is_verified

Nothing about validity is cached at issuance, so a change to an
issuer's standing applies to every credential it ever issued.  The
result carries the credential, the issuer record and each factor, so a
caller can see why a credential is invalid without a second lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from skill_registry.core.metrics import VERIFICATIONS
from skill_registry.models.credential import Credential
from skill_registry.models.issuer import Issuer
from skill_registry.services.errors import NotFoundError
from skill_registry.services.ledger import Ledger

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VerificationResult:
    is_valid: bool
    credential: Credential
    issuer: Issuer | None
    is_active: bool
    not_expired: bool
    issuer_authorized: bool
    checked_at: int


def verify_credential(ledger: Ledger, credential_id: int) -> VerificationResult:
    with ledger.snapshot() as now:
        credential = ledger.credentials.get(credential_id)
        if credential is None:
            raise NotFoundError(f"credential {credential_id}")
        issuer = ledger.issuers.get(credential.issuer)
        issuer_authorized = ledger.issuers.is_authorized(credential.issuer)

    not_expired = not credential.is_expired_at(now)
    is_valid = (
        credential.is_active
        and not_expired
        and issuer_authorized
        and issuer is not None
        and issuer.is_verified
    )

    VERIFICATIONS.labels(result="valid" if is_valid else "invalid").inc()
    logger.debug(
        "Verified credential id=%d valid=%s active=%s not_expired=%s authorized=%s",
        credential_id,
        is_valid,
        credential.is_active,
        not_expired,
        issuer_authorized,
        extra={"credential_id": credential_id},
    )
    return VerificationResult(
        is_valid=is_valid,
        credential=credential,
        issuer=issuer,
        is_active=credential.is_active,
        not_expired=not_expired,
        issuer_authorized=issuer_authorized,
        checked_at=now,
    )
