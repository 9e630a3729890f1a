from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from skill_registry.models.credential import Credential


class CredentialRepo(Protocol):
    def count(self) -> int: ...
    def get(self, credential_id: int) -> Credential | None: ...
    def append(self, credential: Credential) -> None: ...
    def deactivate(self, credential_id: int) -> Credential: ...
    def list_by_learner(self, learner: str) -> list[int]: ...


class InMemoryCredentialRepo:
    """Credentials in a growable table indexed by ``id - 1``.

    The table length is the credential counter, so ids stay gapless and
    the counter can never drift from the store.  The learner index is
    append-only and updated by the same append() call.
    """

    def __init__(self) -> None:
        self._rows: list[Credential] = []
        self._by_learner: dict[str, list[int]] = {}

    def count(self) -> int:
        return len(self._rows)

    def get(self, credential_id: int) -> Credential | None:
        if not 1 <= credential_id <= len(self._rows):
            return None
        return self._rows[credential_id - 1]

    def append(self, credential: Credential) -> None:
        if credential.id != len(self._rows) + 1:
            raise ValueError(
                f"credential id {credential.id} is not next in sequence "
                f"(expected {len(self._rows) + 1})"
            )
        self._rows.append(credential)
        self._by_learner.setdefault(credential.learner, []).append(credential.id)

    def deactivate(self, credential_id: int) -> Credential:
        existing = self.get(credential_id)
        if existing is None:
            raise KeyError("credential not found")
        updated = replace(existing, is_active=False)
        self._rows[credential_id - 1] = updated
        return updated

    def list_by_learner(self, learner: str) -> list[int]:
        return list(self._by_learner.get(learner, ()))
