"""Timestamp sources for the ledger.

The core never reads the wall clock directly: the host supplies "now"
per call, and it must be non-decreasing across the ledger's serialized
call order.  SystemClock enforces that against wall-clock steps
backwards (NTP corrections, VM migration) by never returning less than
the last value it handed out.
"""

from __future__ import annotations

import threading
import time
from typing import Protocol

# Largest timestamp the registry will store (unsigned 64-bit seconds).
MAX_TIMESTAMP = 2**64 - 1


class Clock(Protocol):
    def now(self) -> int: ...


class SystemClock:
    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            current = max(int(time.time()), self._last)
            self._last = current
            return current


class ManualClock:
    """Clock that only moves when told to.  Used by tests and replays."""

    def __init__(self, start: int = 1_700_000_000) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("clock cannot move backwards")
        self._now += seconds
        return self._now

    def set(self, timestamp: int) -> None:
        if timestamp < self._now:
            raise ValueError("clock cannot move backwards")
        self._now = timestamp
