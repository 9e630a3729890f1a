"""Demo: walk register → authorize → issue → verify → revoke over HTTP.

Run with:
    REGISTRY_OWNER=demo-owner python scripts/demo_registry_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from skill_registry.api.dependencies import ledger
from skill_registry.main import app
from skill_registry.services import token_service

ISSUER = "issuer-ada"
STRANGER = "issuer-bob"
LEARNER = "learner-lin"


def _auth(identity: str) -> dict[str, str]:
    token = token_service.create_access_token(sub=identity)
    return {"Authorization": f"Bearer {token}"}


def main() -> None:
    client = TestClient(app)
    owner = ledger.owner

    # ── Step 1: issuer self-registers ───────────────────────────────
    r = client.post(
        "/v1/issuers",
        json={"name": "Ada Academy", "organization": "Ada Foundation"},
        headers=_auth(ISSUER),
    )
    print(f"1. POST /v1/issuers                → {r.status_code}  verified={r.json()['is_verified']}")

    # ── Step 2: issuing before authorization fails ──────────────────
    body = {"learner": LEARNER, "skill_name": "Python", "proficiency_level": 3}
    r = client.post("/v1/credentials", json=body, headers=_auth(ISSUER))
    print(f"2. POST /v1/credentials (pending)  → {r.status_code}  {r.json()['detail']['error']}")

    # ── Step 3: owner authorizes ────────────────────────────────────
    r = client.post(f"/v1/issuers/{ISSUER}/authorize", headers=_auth(owner))
    print(f"3. POST .../authorize (owner)      → {r.status_code}  verified={r.json()['is_verified']}")

    # ── Step 4: issue ───────────────────────────────────────────────
    r = client.post("/v1/credentials", json=body, headers=_auth(ISSUER))
    credential_id = r.json()["id"]
    print(f"4. POST /v1/credentials            → {r.status_code}  id={credential_id}")

    # ── Step 5: public verification ─────────────────────────────────
    r = client.get(f"/v1/credentials/{credential_id}/verify")
    print(f"5. GET  .../verify                 → {r.status_code}  valid={r.json()['valid']}")

    # ── Step 6: someone else tries to revoke ────────────────────────
    r = client.post(
        f"/v1/credentials/{credential_id}/revoke",
        json={"reason": "mine now"},
        headers=_auth(STRANGER),
    )
    print(f"6. POST .../revoke (stranger)      → {r.status_code}  {r.json()['detail']['error']}")

    # ── Step 7: original issuer revokes ─────────────────────────────
    r = client.post(
        f"/v1/credentials/{credential_id}/revoke",
        json={"reason": "error"},
        headers=_auth(ISSUER),
    )
    print(f"7. POST .../revoke (issuer)        → {r.status_code}  active={r.json()['is_active']}")

    # ── Step 8: verify again ────────────────────────────────────────
    r = client.get(f"/v1/credentials/{credential_id}/verify")
    print(f"8. GET  .../verify                 → {r.status_code}  valid={r.json()['valid']}")

    # ── Step 9: audit log ───────────────────────────────────────────
    r = client.get("/v1/events")
    print(f"9. GET  /v1/events                 → {r.status_code}  {[e['kind'] for e in r.json()]}")

    print("\nAll steps completed.")


if __name__ == "__main__":
    main()
