"""Append-only audit log of registry transitions.

Every accepted write appends exactly one event.  Subscribers are plain
callables invoked synchronously, in log order, after the event is
appended; they observe the ledger state the transition produced.

A failing subscriber is logged and skipped; the transition it was
notified about has already been applied.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from skill_registry.models.events import LoggedEvent, RegistryEvent

logger = logging.getLogger(__name__)

Subscriber = Callable[[LoggedEvent], None]


class EventLog:
    def __init__(self) -> None:
        self._entries: list[LoggedEvent] = []
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback.  Returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def append(self, event: RegistryEvent, timestamp: int) -> LoggedEvent:
        entry = LoggedEvent(seq=len(self._entries) + 1, timestamp=timestamp, event=event)
        self._entries.append(entry)
        logger.debug("Event seq=%d kind=%s", entry.seq, event.kind)

        for callback in list(self._subscribers):
            try:
                callback(entry)
            except Exception:
                logger.exception(
                    "Event subscriber %r failed on seq=%d kind=%s",
                    callback,
                    entry.seq,
                    event.kind,
                )
        return entry

    def since(self, seq: int = 0) -> list[LoggedEvent]:
        """Entries with a sequence number greater than ``seq``."""
        if seq < 0:
            seq = 0
        return list(self._entries[seq:])

    def __len__(self) -> int:
        return len(self._entries)
