"""Credential registry and verification endpoints.

- POST /v1/credentials                        — issue (authorized issuer)
- POST /v1/credentials/{id}/revoke            — revoke (original issuer)
- GET  /v1/credentials/total                  — current credential counter
- GET  /v1/credentials/{id}                   — public credential record
- GET  /v1/credentials/{id}/verify            — public verification
- GET  /v1/learners/{learner}/credentials     — a learner's credential ids
"""

from __future__ import annotations

from fastapi import APIRouter, status
from pydantic import BaseModel, StrictInt

from skill_registry.api.dependencies import CallerDep, LedgerDep
from skill_registry.api.errors import to_http_exception
from skill_registry.api.issuers import IssuerOut
from skill_registry.models.credential import Credential
from skill_registry.services import credential_service, verification_service
from skill_registry.services.errors import RegistryError

router = APIRouter(prefix="/v1/credentials", tags=["credentials"])
learners_router = APIRouter(prefix="/v1/learners", tags=["credentials"])


class CredentialIssueIn(BaseModel):
    learner: str
    skill_name: str
    description: str = ""
    proficiency_level: StrictInt
    validity_period: StrictInt = 0  # seconds; 0 = permanent
    metadata_hash: str = ""


class CredentialRevokeIn(BaseModel):
    reason: str = ""


class CredentialOut(BaseModel):
    id: int
    learner: str
    issuer: str
    skill_name: str
    description: str
    proficiency_level: int
    issue_date: int
    expiry_date: int
    is_active: bool
    metadata_hash: str

    @staticmethod
    def from_credential(credential: Credential) -> CredentialOut:
        return CredentialOut(
            id=credential.id,
            learner=credential.learner,
            issuer=credential.issuer,
            skill_name=credential.skill_name,
            description=credential.description,
            proficiency_level=credential.proficiency_level,
            issue_date=credential.issue_date,
            expiry_date=credential.expiry_date,
            is_active=credential.is_active,
            metadata_hash=credential.metadata_hash,
        )


class CredentialVerifyOut(BaseModel):
    valid: bool
    is_active: bool
    not_expired: bool
    issuer_authorized: bool
    checked_at: int
    credential: CredentialOut
    issuer: IssuerOut | None


class TotalOut(BaseModel):
    total: int


class LearnerCredentialsOut(BaseModel):
    learner: str
    credential_ids: list[int]


@router.post("", response_model=CredentialOut, status_code=status.HTTP_201_CREATED)
def issue_credential(
    body: CredentialIssueIn,
    principal: CallerDep,
    ledger: LedgerDep,
) -> CredentialOut:
    try:
        credential = credential_service.issue_credential(
            ledger,
            principal.identity,
            learner=body.learner,
            skill_name=body.skill_name,
            description=body.description,
            proficiency_level=body.proficiency_level,
            validity_period=body.validity_period,
            metadata_hash=body.metadata_hash,
        )
    except RegistryError as e:
        raise to_http_exception(e) from None
    return CredentialOut.from_credential(credential)


@router.post("/{credential_id}/revoke", response_model=CredentialOut)
def revoke_credential(
    credential_id: int,
    body: CredentialRevokeIn,
    principal: CallerDep,
    ledger: LedgerDep,
) -> CredentialOut:
    try:
        credential = credential_service.revoke_credential(
            ledger, principal.identity, credential_id, reason=body.reason
        )
    except RegistryError as e:
        raise to_http_exception(e) from None
    return CredentialOut.from_credential(credential)


# Declared before /{credential_id} so "total" is not parsed as an id.
@router.get("/total", response_model=TotalOut)
def get_total_credentials(ledger: LedgerDep) -> TotalOut:
    return TotalOut(total=credential_service.get_total_credentials(ledger))


@router.get("/{credential_id}", response_model=CredentialOut)
def get_credential(credential_id: int, ledger: LedgerDep) -> CredentialOut:
    try:
        credential = credential_service.get_credential(ledger, credential_id)
    except RegistryError as e:
        raise to_http_exception(e) from None
    return CredentialOut.from_credential(credential)


@router.get("/{credential_id}/verify", response_model=CredentialVerifyOut)
def verify_credential(credential_id: int, ledger: LedgerDep) -> CredentialVerifyOut:
    try:
        result = verification_service.verify_credential(ledger, credential_id)
    except RegistryError as e:
        raise to_http_exception(e) from None

    return CredentialVerifyOut(
        valid=result.is_valid,
        is_active=result.is_active,
        not_expired=result.not_expired,
        issuer_authorized=result.issuer_authorized,
        checked_at=result.checked_at,
        credential=CredentialOut.from_credential(result.credential),
        issuer=IssuerOut.from_issuer(result.issuer) if result.issuer else None,
    )


@learners_router.get("/{learner}/credentials", response_model=LearnerCredentialsOut)
def get_learner_credentials(learner: str, ledger: LedgerDep) -> LearnerCredentialsOut:
    return LearnerCredentialsOut(
        learner=learner,
        credential_ids=credential_service.get_learner_credentials(ledger, learner),
    )
