"""The ledger: the single shared state every registry call runs against.

Holds the owner identity (fixed at construction), the issuer and
credential repos, the audit log and the clock.  There are no
module-level globals in the core; the API layer owns one Ledger
instance and passes it to the service functions.

SERIALIZATION
---------------
Writes run inside ``transaction()``, which holds a re-entrant lock for
the whole call and yields the timestamp for that call.  Service
functions check every precondition before their first write, so a
rejected call leaves nothing behind, and an accepted call's writes are
never visible half-applied.  Reads use ``snapshot()``, which takes the
same lock so a verification cannot interleave with an issuance that
has stored the credential but not yet bumped the issuer counter.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

from skill_registry.models.events import LoggedEvent, RegistryEvent
from skill_registry.repos.credential_repo import CredentialRepo, InMemoryCredentialRepo
from skill_registry.repos.issuer_repo import InMemoryIssuerRepo, IssuerRepo
from skill_registry.services.clock import Clock, SystemClock
from skill_registry.services.events import EventLog


class Ledger:
    def __init__(
        self,
        *,
        owner: str,
        clock: Clock | None = None,
        issuers: IssuerRepo | None = None,
        credentials: CredentialRepo | None = None,
        events: EventLog | None = None,
    ) -> None:
        if not owner:
            raise ValueError("ledger owner must be non-empty")
        self._owner = owner
        self.clock: Clock = clock or SystemClock()
        self.issuers: IssuerRepo = issuers or InMemoryIssuerRepo()
        self.credentials: CredentialRepo = credentials or InMemoryCredentialRepo()
        self.events = events or EventLog()
        self._lock = threading.RLock()

    @property
    def owner(self) -> str:
        return self._owner

    @contextmanager
    def transaction(self) -> Iterator[int]:
        with self._lock:
            yield self.clock.now()

    @contextmanager
    def snapshot(self) -> Iterator[int]:
        with self._lock:
            yield self.clock.now()

    def emit(self, event: RegistryEvent, timestamp: int) -> LoggedEvent:
        return self.events.append(event, timestamp)
