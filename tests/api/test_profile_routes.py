"""Profile routes: identity header, registration, update, lookup, error envelope."""

import logging

from tests.actors import ALICE, STRANGER, as_actor


async def test_health(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"
    assert res.json()["last_sequence"] == -1


async def test_create_profile_returns_receipt(client):
    res = await client.post(
        "/api/v1/profiles",
        json={"name": "Alice", "avatar_ref": "QmHash", "is_institute": False},
        headers=as_actor(ALICE),
    )
    assert res.status_code == 201
    body = res.json()
    assert body["sequence"] == 0
    assert body["kind"] == "ProfileCreated"
    assert body["payload"] == {"actor": ALICE, "name": "Alice", "isInstitute": False}


async def test_identity_header_is_normalized(client, ledger):
    res = await client.post(
        "/api/v1/profiles", json={"name": "Alice"}, headers=as_actor("0x" + ALICE[2:].upper()),
    )
    assert res.status_code == 201
    assert ledger.get_profile(ALICE).exists


async def test_missing_identity_is_401(client):
    res = await client.post("/api/v1/profiles", json={"name": "Alice"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "MISSING_IDENTITY"


async def test_malformed_identity_is_401(client):
    res = await client.post(
        "/api/v1/profiles", json={"name": "Alice"}, headers=as_actor("alice"),
    )
    assert res.status_code == 401


async def test_duplicate_registration_is_409(client):
    await client.post("/api/v1/profiles", json={"name": "Alice"}, headers=as_actor(ALICE))
    res = await client.post("/api/v1/profiles", json={"name": "Eve"}, headers=as_actor(ALICE))
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "ALREADY_REGISTERED"
    assert error["context"]["operation"] == "create_profile"
    assert error["context"]["actor"] == ALICE


async def test_blank_name_is_invalid_input(client):
    res = await client.post("/api/v1/profiles", json={"name": "   "}, headers=as_actor(ALICE))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_INPUT"


async def test_missing_name_is_validation_error(client):
    res = await client.post("/api/v1/profiles", json={}, headers=as_actor(ALICE))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_update_and_get_profile(client):
    await client.post("/api/v1/profiles", json={"name": "Alice"}, headers=as_actor(ALICE))
    res = await client.put(
        "/api/v1/profiles/me",
        json={"name": "Alice Updated", "avatar_ref": "QmNew"},
        headers=as_actor(ALICE),
    )
    assert res.status_code == 200
    assert res.json()["kind"] == "ProfileUpdated"

    res = await client.get(f"/api/v1/profiles/{ALICE}")
    assert res.json() == {
        "actor": ALICE, "name": "Alice Updated", "avatar_ref": "QmNew",
        "is_institute": False, "exists": True,
    }


async def test_update_unregistered_is_404(client):
    res = await client.put(
        "/api/v1/profiles/me", json={"name": "Ghost"}, headers=as_actor(STRANGER),
    )
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_REGISTERED"


async def test_unknown_profile_reports_absent(client):
    res = await client.get(f"/api/v1/profiles/{STRANGER}")
    assert res.status_code == 200
    assert res.json()["exists"] is False


async def test_bad_address_in_path_is_validation_error(client):
    res = await client.get("/api/v1/profiles/not-an-address")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


def _error_logs(caplog):
    return [r for r in caplog.records if getattr(r, "error_code", None)]


async def test_ledger_rejection_logged_once(client, caplog):
    with caplog.at_level(logging.INFO):
        res = await client.put(
            "/api/v1/profiles/me", json={"name": "Ghost"}, headers=as_actor(STRANGER),
        )
    assert res.status_code == 404
    logged = _error_logs(caplog)
    assert len(logged) == 1
    assert logged[0].name == "ecertify.services.ledger"
    assert logged[0].operation == "update_profile"


async def test_shell_rejection_logged_by_handler(client, caplog):
    with caplog.at_level(logging.INFO):
        res = await client.post("/api/v1/profiles", json={"name": "Alice"})
    assert res.status_code == 401
    logged = _error_logs(caplog)
    assert len(logged) == 1
    assert logged[0].name == "ecertify.main"
    assert logged[0].error_code == "MISSING_IDENTITY"
