"""Health and readiness endpoints.

/health (liveness) reports process status plus a summary of ledger
size.  /ready (readiness) returns 200 once the app has started; the ledger is
in-process, so there is no backing service to wait on.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from skill_registry.api.dependencies import LedgerDep

router = APIRouter(tags=["health"])


@router.get("/health")
def health(ledger: LedgerDep) -> dict:
    with ledger.snapshot() as now:
        summary = {
            "issuers": len(ledger.issuers.list_all()),
            "credentials": ledger.credentials.count(),
            "events": len(ledger.events),
            "clock": now,
        }
    return {"status": "ok", "ledger": summary}


@router.get("/ready")
def ready() -> Response:
    return Response(status_code=status.HTTP_200_OK)
