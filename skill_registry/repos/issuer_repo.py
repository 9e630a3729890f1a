from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from skill_registry.models.issuer import Issuer


class IssuerRepo(Protocol):
    def get(self, address: str) -> Issuer | None: ...
    def add(self, issuer: Issuer) -> None: ...
    def authorize(self, address: str) -> Issuer: ...
    def is_authorized(self, address: str) -> bool: ...
    def increment_issued(self, address: str) -> Issuer: ...
    def list_all(self) -> list[Issuer]: ...


class InMemoryIssuerRepo:
    """Issuers keyed by identity, plus the authorized-issuer set.

    ``is_verified`` on the record and membership in ``_authorized`` are
    only ever changed together, inside authorize().
    """

    def __init__(self) -> None:
        self._by_address: dict[str, Issuer] = {}
        self._authorized: set[str] = set()

    def get(self, address: str) -> Issuer | None:
        return self._by_address.get(address)

    def add(self, issuer: Issuer) -> None:
        if issuer.address in self._by_address:
            raise ValueError("issuer already registered")
        self._by_address[issuer.address] = issuer

    def authorize(self, address: str) -> Issuer:
        existing = self._by_address.get(address)
        if existing is None:
            raise KeyError("issuer not found")
        updated = replace(existing, is_verified=True)
        self._by_address[address] = updated
        self._authorized.add(address)
        return updated

    def is_authorized(self, address: str) -> bool:
        return address in self._authorized

    def increment_issued(self, address: str) -> Issuer:
        existing = self._by_address.get(address)
        if existing is None:
            raise KeyError("issuer not found")
        updated = replace(existing, credentials_issued=existing.credentials_issued + 1)
        self._by_address[address] = updated
        return updated

    def list_all(self) -> list[Issuer]:
        return list(self._by_address.values())
