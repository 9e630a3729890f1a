from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from skill_registry.api.dependencies import get_ledger
from skill_registry.main import app
from skill_registry.models.issuer import Issuer
from skill_registry.services import issuer_service, token_service
from skill_registry.services.clock import ManualClock
from skill_registry.services.ledger import Ledger

# Ensure repo root is on sys.path so `import skill_registry` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

OWNER = "registry-owner"
START = 1_700_000_000


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start=START)


@pytest.fixture
def ledger(clock: ManualClock) -> Ledger:
    """A fresh ledger per test; nothing leaks between tests."""
    return Ledger(owner=OWNER, clock=clock)


@pytest.fixture
def client(ledger: Ledger) -> Iterator[TestClient]:
    app.dependency_overrides[get_ledger] = lambda: ledger
    yield TestClient(app)
    app.dependency_overrides.pop(get_ledger, None)


def mint_token(identity: str = "test-user") -> str:
    """Create a valid ES256 JWT for ``identity``."""
    return token_service.create_access_token(sub=identity)


def auth(identity: str | None) -> dict[str, str]:
    if identity is None:
        return {}
    return {"Authorization": f"Bearer {mint_token(identity)}"}


# ---------------------------------------------------------------------------
# Registry helpers
# ---------------------------------------------------------------------------


def make_authorized_issuer(
    ledger: Ledger,
    address: str = "issuer-a",
    *,
    name: str = "Ada Academy",
    organization: str = "Ada Foundation",
) -> Issuer:
    """Register ``address`` and have the owner authorize it."""
    issuer_service.register_issuer(ledger, address, name=name, organization=organization)
    return issuer_service.authorize_issuer(ledger, OWNER, address)
