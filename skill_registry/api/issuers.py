"""Issuer registry endpoints.

- POST /v1/issuers                         — self-register the caller
- POST /v1/issuers/{address}/authorize     — owner authorizes an issuer
- GET  /v1/issuers/{address}               — public issuer record
- GET  /v1/issuers/{address}/authorized    — public membership probe
"""

from __future__ import annotations

from fastapi import APIRouter, status
from pydantic import BaseModel

from skill_registry.api.dependencies import CallerDep, LedgerDep
from skill_registry.api.errors import to_http_exception
from skill_registry.models.issuer import Issuer
from skill_registry.services import issuer_service
from skill_registry.services.errors import RegistryError

router = APIRouter(prefix="/v1/issuers", tags=["issuers"])


class IssuerRegisterIn(BaseModel):
    name: str
    organization: str


class IssuerOut(BaseModel):
    address: str
    name: str
    organization: str
    is_verified: bool
    credentials_issued: int
    registration_date: int

    @staticmethod
    def from_issuer(issuer: Issuer) -> IssuerOut:
        return IssuerOut(
            address=issuer.address,
            name=issuer.name,
            organization=issuer.organization,
            is_verified=issuer.is_verified,
            credentials_issued=issuer.credentials_issued,
            registration_date=issuer.registration_date,
        )


class AuthorizedOut(BaseModel):
    address: str
    authorized: bool


@router.post("", response_model=IssuerOut, status_code=status.HTTP_201_CREATED)
def register_issuer(
    body: IssuerRegisterIn,
    principal: CallerDep,
    ledger: LedgerDep,
) -> IssuerOut:
    """Register the caller as an issuer.  Authorization is a separate step."""
    try:
        issuer = issuer_service.register_issuer(
            ledger,
            principal.identity,
            name=body.name,
            organization=body.organization,
        )
    except RegistryError as e:
        raise to_http_exception(e) from None
    return IssuerOut.from_issuer(issuer)


@router.post("/{address}/authorize", response_model=IssuerOut)
def authorize_issuer(
    address: str,
    principal: CallerDep,
    ledger: LedgerDep,
) -> IssuerOut:
    try:
        issuer = issuer_service.authorize_issuer(ledger, principal.identity, address)
    except RegistryError as e:
        raise to_http_exception(e) from None
    return IssuerOut.from_issuer(issuer)


@router.get("/{address}", response_model=IssuerOut)
def get_issuer(address: str, ledger: LedgerDep) -> IssuerOut:
    try:
        issuer = issuer_service.get_issuer(ledger, address)
    except RegistryError as e:
        raise to_http_exception(e) from None
    return IssuerOut.from_issuer(issuer)


@router.get("/{address}/authorized", response_model=AuthorizedOut)
def is_authorized_issuer(address: str, ledger: LedgerDep) -> AuthorizedOut:
    return AuthorizedOut(
        address=address,
        authorized=issuer_service.is_authorized_issuer(ledger, address),
    )
