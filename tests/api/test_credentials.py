"""Tests for credential issuance, revocation and verification endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from skill_registry.services.clock import ManualClock
from skill_registry.services.ledger import Ledger
from tests.conftest import START, auth, make_authorized_issuer


def _issue(client: TestClient, identity: str = "issuer-a", **body):
    payload = {
        "learner": "learner-l",
        "skill_name": "Python",
        "description": "Core language",
        "proficiency_level": 3,
        "validity_period": 0,
        "metadata_hash": "bafybeigdyrzt",
    }
    payload.update(body)
    return client.post("/v1/credentials", json=payload, headers=auth(identity))


@pytest.fixture
def issuer(ledger: Ledger):
    return make_authorized_issuer(ledger, "issuer-a")


# ---- issue ----


def test_issue_returns_created_credential(client: TestClient, issuer) -> None:
    resp = _issue(client)
    assert resp.status_code == 201
    assert resp.json() == {
        "id": 1,
        "learner": "learner-l",
        "issuer": "issuer-a",
        "skill_name": "Python",
        "description": "Core language",
        "proficiency_level": 3,
        "issue_date": START,
        "expiry_date": 0,
        "is_active": True,
        "metadata_hash": "bafybeigdyrzt",
    }


def test_issue_id_matches_total(client: TestClient, issuer) -> None:
    for expected in (1, 2, 3):
        assert _issue(client).json()["id"] == expected
        assert client.get("/v1/credentials/total").json() == {"total": expected}


def test_issue_requires_token(client: TestClient, issuer) -> None:
    resp = client.post(
        "/v1/credentials",
        json={"learner": "l", "skill_name": "s", "proficiency_level": 1},
    )
    assert resp.status_code == 401


def test_unauthorized_issuer_cannot_issue(client: TestClient) -> None:
    client.post(
        "/v1/issuers",
        json={"name": "B", "organization": "Org"},
        headers=auth("issuer-b"),
    )
    resp = _issue(client, "issuer-b")
    assert resp.status_code == 403
    assert resp.json()["detail"]["error"] == "NotAuthorizedIssuer"
    assert client.get("/v1/credentials/total").json() == {"total": 0}
    assert client.get("/v1/learners/learner-l/credentials").json()[
        "credential_ids"
    ] == []


@pytest.mark.parametrize(
    "body,error",
    [
        ({"learner": ""}, "InvalidLearner"),
        ({"skill_name": ""}, "InvalidSkillName"),
        ({"proficiency_level": 0}, "InvalidProficiencyLevel"),
        ({"proficiency_level": 6}, "InvalidProficiencyLevel"),
        ({"validity_period": -10}, "InvalidInput"),
        ({"validity_period": 2**64}, "InvalidInput"),
    ],
)
def test_issue_invalid_input_is_422(
    client: TestClient, issuer, body: dict, error: str
) -> None:
    resp = _issue(client, **body)
    assert resp.status_code == 422
    assert resp.json()["detail"]["error"] == error
    assert client.get("/v1/credentials/total").json() == {"total": 0}


def test_issue_missing_field_is_schema_422(client: TestClient, issuer) -> None:
    resp = client.post(
        "/v1/credentials",
        json={"learner": "l", "skill_name": "Python"},
        headers=auth("issuer-a"),
    )
    assert resp.status_code == 422


@pytest.mark.parametrize("field", ["proficiency_level", "validity_period"])
def test_issue_rejects_boolean_for_integer_fields(
    client: TestClient, issuer, field: str
) -> None:
    resp = _issue(client, **{field: True})
    assert resp.status_code == 422
    assert client.get("/v1/credentials/total").json() == {"total": 0}
    assert client.get("/v1/learners/learner-l/credentials").json()[
        "credential_ids"
    ] == []


# ---- revoke ----


def test_revoke_by_original_issuer(client: TestClient, issuer) -> None:
    _issue(client)
    resp = client.post(
        "/v1/credentials/1/revoke", json={"reason": "error"}, headers=auth("issuer-a")
    )
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False


def test_second_revoke_conflicts(client: TestClient, issuer) -> None:
    _issue(client)
    client.post("/v1/credentials/1/revoke", json={}, headers=auth("issuer-a"))
    resp = client.post("/v1/credentials/1/revoke", json={}, headers=auth("issuer-a"))
    assert resp.status_code == 409
    assert resp.json()["detail"]["error"] == "AlreadyInactive"


def test_revoke_by_other_issuer_forbidden(
    client: TestClient, ledger: Ledger, issuer
) -> None:
    make_authorized_issuer(ledger, "issuer-b")
    _issue(client)
    resp = client.post("/v1/credentials/1/revoke", json={}, headers=auth("issuer-b"))
    assert resp.status_code == 403
    assert resp.json()["detail"]["error"] == "NotOriginalIssuer"
    assert client.get("/v1/credentials/1").json()["is_active"] is True


def test_revoke_unknown_404(client: TestClient, issuer) -> None:
    resp = client.post("/v1/credentials/5/revoke", json={}, headers=auth("issuer-a"))
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"] == "NotFound"


# ---- verify / reads ----


def test_verify_is_public(client: TestClient, issuer) -> None:
    _issue(client)
    resp = client.get("/v1/credentials/1/verify")
    assert resp.status_code == 200
    body = resp.json()
    assert body["valid"] is True
    assert body["credential"]["proficiency_level"] == 3
    assert body["credential"]["expiry_date"] == 0
    assert body["issuer"]["address"] == "issuer-a"
    assert body["issuer"]["credentials_issued"] == 1


def test_verify_expired(
    client: TestClient, clock: ManualClock, issuer
) -> None:
    _issue(client, validity_period=30)
    clock.advance(31)
    body = client.get("/v1/credentials/1/verify").json()
    assert body["valid"] is False
    assert body["not_expired"] is False
    assert body["is_active"] is True
    assert body["checked_at"] == START + 31


def test_verify_revoked(client: TestClient, issuer) -> None:
    _issue(client)
    client.post(
        "/v1/credentials/1/revoke", json={"reason": "error"}, headers=auth("issuer-a")
    )
    body = client.get("/v1/credentials/1/verify").json()
    assert body["valid"] is False
    assert body["credential"]["is_active"] is False


@pytest.mark.parametrize("credential_id", ["0", "-1", "1", "999"])
def test_verify_unknown_404(client: TestClient, credential_id: str) -> None:
    resp = client.get(f"/v1/credentials/{credential_id}/verify")
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"] == "NotFound"


def test_get_credential_unknown_404(client: TestClient) -> None:
    assert client.get("/v1/credentials/1").status_code == 404


def test_learner_credentials(client: TestClient, issuer) -> None:
    _issue(client, learner="l1")
    _issue(client, learner="l2")
    _issue(client, learner="l1")
    resp = client.get("/v1/learners/l1/credentials")
    assert resp.status_code == 200
    assert resp.json() == {"learner": "l1", "credential_ids": [1, 3]}


def test_unknown_learner_gets_empty_list(client: TestClient) -> None:
    resp = client.get("/v1/learners/nobody/credentials")
    assert resp.status_code == 200
    assert resp.json()["credential_ids"] == []


def test_total_is_public_and_starts_at_zero(client: TestClient) -> None:
    assert client.get("/v1/credentials/total").json() == {"total": 0}
