"""Tests for the issuer registry endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient

from skill_registry.services import token_service
from tests.conftest import OWNER, START, auth, mint_token


def _register(client: TestClient, identity: str = "issuer-a", **body):
    payload = {"name": "Ada Academy", "organization": "Ada Foundation"}
    payload.update(body)
    return client.post("/v1/issuers", json=payload, headers=auth(identity))


def test_register_returns_pending_issuer(client: TestClient) -> None:
    resp = _register(client)
    assert resp.status_code == 201
    assert resp.json() == {
        "address": "issuer-a",
        "name": "Ada Academy",
        "organization": "Ada Foundation",
        "is_verified": False,
        "credentials_issued": 0,
        "registration_date": START,
    }


def test_register_identity_comes_from_token(client: TestClient) -> None:
    resp = client.post(
        "/v1/issuers",
        json={"name": "A", "organization": "Org", "address": "spoofed"},
        headers=auth("real-identity"),
    )
    assert resp.status_code == 201
    assert resp.json()["address"] == "real-identity"


def test_register_requires_token(client: TestClient) -> None:
    resp = client.post("/v1/issuers", json={"name": "A", "organization": "Org"})
    assert resp.status_code == 401


def test_register_rejects_garbage_token(client: TestClient) -> None:
    resp = client.post(
        "/v1/issuers",
        json={"name": "A", "organization": "Org"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid token"


def test_register_rejects_expired_token(client: TestClient) -> None:
    token = token_service.create_access_token(sub="issuer-a", ttl_minutes=-1)
    resp = client.post(
        "/v1/issuers",
        json={"name": "A", "organization": "Org"},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Token expired"


def test_register_twice_conflicts(client: TestClient) -> None:
    assert _register(client).status_code == 201
    resp = _register(client, name="Again")
    assert resp.status_code == 409
    assert resp.json()["detail"]["error"] == "AlreadyRegistered"


def test_register_blank_name_is_invalid_input(client: TestClient) -> None:
    resp = _register(client, name="  ")
    assert resp.status_code == 422
    assert resp.json()["detail"]["error"] == "InvalidInput"


def test_owner_authorizes_issuer(client: TestClient) -> None:
    _register(client)
    resp = client.post("/v1/issuers/issuer-a/authorize", headers=auth(OWNER))
    assert resp.status_code == 200
    assert resp.json()["is_verified"] is True

    probe = client.get("/v1/issuers/issuer-a/authorized")
    assert probe.json() == {"address": "issuer-a", "authorized": True}


def test_non_owner_cannot_authorize(client: TestClient) -> None:
    _register(client)
    resp = client.post("/v1/issuers/issuer-a/authorize", headers=auth("issuer-a"))
    assert resp.status_code == 403
    assert resp.json()["detail"]["error"] == "NotOwner"
    assert client.get("/v1/issuers/issuer-a").json()["is_verified"] is False


def test_authorize_unknown_issuer_404(client: TestClient) -> None:
    resp = client.post("/v1/issuers/ghost/authorize", headers=auth(OWNER))
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"] == "UnknownIssuer"


def test_authorize_requires_token(client: TestClient) -> None:
    _register(client)
    assert client.post("/v1/issuers/issuer-a/authorize").status_code == 401


def test_get_issuer_is_public(client: TestClient) -> None:
    _register(client)
    resp = client.get("/v1/issuers/issuer-a")
    assert resp.status_code == 200
    assert resp.json()["organization"] == "Ada Foundation"


def test_get_unknown_issuer_404(client: TestClient) -> None:
    resp = client.get("/v1/issuers/ghost")
    assert resp.status_code == 404


def test_authorized_probe_never_fails(client: TestClient) -> None:
    resp = client.get("/v1/issuers/ghost/authorized")
    assert resp.status_code == 200
    assert resp.json()["authorized"] is False


def test_mint_token_round_trips_identity() -> None:
    claims = token_service.decode_access_token(mint_token("someone"))
    assert claims["sub"] == "someone"
