"""Notifications emitted by registry transitions.

Each event is a frozen record appended to the audit log and delivered
to subscribers.  ``seq`` is the position in the log (1-based) and is
assigned by the log, not by the emitter.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, ClassVar


@dataclass(frozen=True, slots=True)
class RegistryEvent:
    kind: ClassVar[str] = "RegistryEvent"

    def payload(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class IssuerRegistered(RegistryEvent):
    kind: ClassVar[str] = "IssuerRegistered"

    identity: str
    name: str
    organization: str


@dataclass(frozen=True, slots=True)
class IssuerAuthorized(RegistryEvent):
    kind: ClassVar[str] = "IssuerAuthorized"

    identity: str


@dataclass(frozen=True, slots=True)
class CredentialIssued(RegistryEvent):
    kind: ClassVar[str] = "CredentialIssued"

    id: int
    learner: str
    issuer: str
    skill_name: str
    proficiency_level: int


@dataclass(frozen=True, slots=True)
class CredentialRevoked(RegistryEvent):
    kind: ClassVar[str] = "CredentialRevoked"

    id: int
    issuer: str
    reason: str


@dataclass(frozen=True, slots=True)
class LoggedEvent:
    seq: int
    timestamp: int
    event: RegistryEvent
