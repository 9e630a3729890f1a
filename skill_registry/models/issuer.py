from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Issuer:
    address: str
    name: str
    organization: str
    registration_date: int
    is_verified: bool = False
    credentials_issued: int = 0

    @staticmethod
    def new(*, address: str, name: str, organization: str, now: int) -> Issuer:
        return Issuer(
            address=address,
            name=name,
            organization=organization,
            registration_date=now,
        )
