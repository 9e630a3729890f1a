"""Audit log feed.

GET /v1/events?since=N returns every registry event with seq > N, in
ledger order.  Consumers poll with the last seq they processed.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Query
from pydantic import BaseModel

from skill_registry.api.dependencies import LedgerDep

router = APIRouter(prefix="/v1/events", tags=["events"])


class EventOut(BaseModel):
    seq: int
    timestamp: int
    kind: str
    payload: dict[str, Any]


@router.get("", response_model=list[EventOut])
def list_events(
    ledger: LedgerDep,
    since: Annotated[int, Query(ge=0)] = 0,
) -> list[EventOut]:
    with ledger.snapshot():
        entries = ledger.events.since(since)
    return [
        EventOut(
            seq=entry.seq,
            timestamp=entry.timestamp,
            kind=entry.event.kind,
            payload=entry.event.payload(),
        )
        for entry in entries
    ]
