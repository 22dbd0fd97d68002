from __future__ import annotations

from fastapi.testclient import TestClient

from recipeshare.app import app
from recipeshare.auth.users import seed_admin
from recipeshare.storage import get_store

client = TestClient(app)


def _register(username: str) -> dict[str, str]:
    resp = client.post("/api/auth/register", json={
        "name": username.title(),
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret123",
    })
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def _admin() -> dict[str, str]:
    seed_admin(get_store(), "admin@example.com", "Admin@123")
    resp = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "Admin@123"})
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def test_file_complaint():
    alice = _register("alice")
    resp = client.post(
        "/api/complaints",
        json={"content": "  Spam recipe  ", "reference_url": "http://localhost/recipes/1"},
        headers=alice,
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["content"] == "Spam recipe"
    assert body["reference_url"] == "http://localhost/recipes/1"


def test_reference_url_defaults_to_empty():
    alice = _register("alice")
    resp = client.post("/api/complaints", json={"content": "Broken image"}, headers=alice)
    assert resp.json()["reference_url"] == ""


def test_complaint_content_required():
    alice = _register("alice")
    assert client.post("/api/complaints", json={"content": ""}, headers=alice).status_code == 400
    assert client.post("/api/complaints", json={}, headers=alice).status_code == 400


def test_my_complaints_only_returns_own():
    alice = _register("alice")
    bob = _register("bob")
    client.post("/api/complaints", json={"content": "From Alice"}, headers=alice)
    client.post("/api/complaints", json={"content": "From Bob"}, headers=bob)

    mine = client.get("/api/complaints/my", headers=alice).json()
    assert [c["content"] for c in mine] == ["From Alice"]


def test_list_all_requires_admin():
    alice = _register("alice")
    assert client.get("/api/complaints", headers=alice).status_code == 403
    assert client.get("/api/complaints").status_code == 401


def test_admin_lists_complaints_with_author():
    alice = _register("alice")
    client.post("/api/complaints", json={"content": "Offensive comment"}, headers=alice)

    resp = client.get("/api/complaints", headers=_admin())
    assert resp.status_code == 200
    complaint = resp.json()[0]
    assert complaint["user"]["name"] == "Alice"
    assert complaint["user"]["email"] == "alice@example.com"


def test_admin_deletes_complaint():
    alice = _register("alice")
    complaint = client.post("/api/complaints", json={"content": "Dup"}, headers=alice).json()
    admin = _admin()

    assert client.delete(f"/api/complaints/{complaint['id']}", headers=alice).status_code == 403
    assert client.delete(f"/api/complaints/{complaint['id']}", headers=admin).status_code == 200
    assert client.delete(f"/api/complaints/{complaint['id']}", headers=admin).status_code == 404
