from __future__ import annotations

from datetime import timedelta

from fastapi.testclient import TestClient

from recipeshare.app import app
from recipeshare.auth.tokens import create_access_token
from recipeshare.auth.users import seed_admin
from recipeshare.storage import USERS, get_store

client = TestClient(app)


def _register(username: str = "alice", password: str = "secret123") -> dict:
    resp = client.post("/api/auth/register", json={
        "name": username.title(),
        "username": username,
        "email": f"{username}@example.com",
        "password": password,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _admin_token() -> str:
    seed_admin(get_store(), "admin@example.com", "Admin@123")
    resp = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "Admin@123"})
    return resp.json()["token"]


# ── Register / Login ─────────────────────────────────────────────────────


def test_register_returns_user_and_token():
    body = _register()
    assert body["token"]
    assert body["user"]["username"] == "alice"
    assert body["user"]["role"] == "user"
    assert body["user"]["status"] == "active"
    assert "password_hash" not in body["user"]


def test_register_duplicate_email():
    _register()
    resp = client.post("/api/auth/register", json={
        "name": "Other", "username": "other", "email": "alice@example.com", "password": "x",
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email already registered"


def test_register_duplicate_username():
    _register()
    resp = client.post("/api/auth/register", json={
        "name": "Other", "username": "alice", "email": "other@example.com", "password": "x",
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Username already taken"


def test_register_missing_fields():
    resp = client.post("/api/auth/register", json={"username": "bob"})
    assert resp.status_code == 400


def test_login_success():
    _register()
    resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "secret123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "alice@example.com"
    assert resp.json()["token"]


def test_login_wrong_password():
    _register()
    resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "wrong"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid credentials"


def test_login_unknown_email():
    resp = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "x"})
    assert resp.status_code == 400


def test_register_rejects_password_over_bcrypt_limit():
    resp = client.post("/api/auth/register", json={
        "name": "Long", "username": "long", "email": "long@example.com", "password": "x" * 80,
    })
    assert resp.status_code == 400
    assert "72 bytes" in resp.json()["detail"]
    assert get_store().count(USERS) == 0


def test_register_counts_password_bytes_not_characters():
    # 40 characters, 80 bytes
    resp = client.post("/api/auth/register", json={
        "name": "Uni", "username": "uni", "email": "uni@example.com", "password": "é" * 40,
    })
    assert resp.status_code == 400


def test_login_rejects_password_over_bcrypt_limit():
    _register()
    resp = client.post("/api/auth/login", json={"email": "alice@example.com", "password": "x" * 80})
    assert resp.status_code == 400


def test_login_with_mixed_case_email_as_registered():
    resp = client.post("/api/auth/register", json={
        "name": "Case", "username": "case", "email": "Case@Example.COM", "password": "secret123",
    })
    assert resp.status_code == 201

    resp = client.post("/api/auth/login", json={"email": "Case@Example.COM", "password": "secret123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "case"


def test_seeded_admin_email_is_normalised():
    seed_admin(get_store(), "Root@Example.COM", "Admin@123", username="root")
    resp = client.post("/api/auth/login", json={"email": "Root@Example.COM", "password": "Admin@123"})
    assert resp.status_code == 200
    assert resp.json()["user"]["role"] == "admin"


# ── Profile ──────────────────────────────────────────────────────────────


def test_me_returns_redacted_account():
    token = _register()["token"]
    resp = client.get("/api/auth/me", headers=_auth(token))
    assert resp.status_code == 200
    assert resp.json()["username"] == "alice"
    assert "password_hash" not in resp.json()


def test_get_user_by_id():
    alice = _register()
    bob = _register("bob")
    resp = client.get(f"/api/auth/user/{alice['user']['id']}", headers=_auth(bob["token"]))
    assert resp.status_code == 200
    assert resp.json()["username"] == "alice"


def test_get_unknown_user():
    token = _register()["token"]
    resp = client.get("/api/auth/user/doesnotexist", headers=_auth(token))
    assert resp.status_code == 404


def test_update_own_profile():
    alice = _register()
    resp = client.put(
        f"/api/auth/user/{alice['user']['id']}",
        json={"name": "Alice Liddell", "image": "/uploads/a.png"},
        headers=_auth(alice["token"]),
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Alice Liddell"
    assert resp.json()["image"] == "/uploads/a.png"


def test_update_other_profile_forbidden():
    alice = _register()
    bob = _register("bob")
    resp = client.put(f"/api/auth/user/{alice['user']['id']}", json={"name": "x"}, headers=_auth(bob["token"]))
    assert resp.status_code == 403


def test_update_profile_username_taken():
    alice = _register()
    _register("bob")
    resp = client.put(
        f"/api/auth/user/{alice['user']['id']}",
        json={"username": "bob"},
        headers=_auth(alice["token"]),
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Username already taken"


# ── Access gate ──────────────────────────────────────────────────────────


def test_missing_token_is_unauthorized():
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401


def test_malformed_header_is_treated_as_missing():
    token = _register()["token"]
    for header in (token, f"Token {token}", "Bearer", f"Bearer {token} extra"):
        resp = client.get("/api/auth/me", headers={"Authorization": header})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Not authorized, token missing"


def test_invalid_token_is_unauthorized():
    resp = client.get("/api/auth/me", headers=_auth("not.a.jwt"))
    assert resp.status_code == 401


def test_expired_token_is_unauthorized():
    user_id = _register()["user"]["id"]
    token = create_access_token(user_id, expires_delta=timedelta(seconds=-1))
    resp = client.get("/api/auth/me", headers=_auth(token))
    assert resp.status_code == 401


def test_token_for_missing_account_is_unauthorized():
    body = _register()
    get_store().delete(USERS, body["user"]["id"])
    resp = client.get("/api/auth/me", headers=_auth(body["token"]))
    assert resp.status_code == 401
    assert resp.json()["detail"] == "User not found"


def test_suspension_applies_to_already_issued_token():
    alice = _register()
    assert client.get("/api/auth/me", headers=_auth(alice["token"])).status_code == 200

    admin = _admin_token()
    resp = client.put(f"/api/admin/users/{alice['user']['id']}/block", headers=_auth(admin))
    assert resp.status_code == 200

    resp = client.get("/api/auth/me", headers=_auth(alice["token"]))
    assert resp.status_code == 403


def test_suspended_account_is_forbidden_everywhere():
    alice = _register()
    get_store().update(USERS, alice["user"]["id"], {"status": "suspended"})
    headers = _auth(alice["token"])
    assert client.get("/api/recipes/saved", headers=headers).status_code == 403
    assert client.post("/api/complaints", json={"content": "hi"}, headers=headers).status_code == 403
    assert client.get("/api/ai/recipes", headers=headers).status_code == 403


def test_non_admin_gets_forbidden_not_unauthorized():
    token = _register()["token"]
    assert client.get("/api/admin/overview", headers=_auth(token)).status_code == 403
    assert client.get("/api/admin/overview").status_code == 401


def test_health_is_public():
    assert client.get("/health").status_code == 200
