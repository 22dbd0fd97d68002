from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from recipeshare.app import app
from recipeshare.config import Settings, get_settings
from recipeshare.errors import ConflictError
from recipeshare.recipes.reviews import average_rating, remove_review, upsert_review
from recipeshare.storage import RECIPES, get_store

client = TestClient(app)

SAMPLE_RECIPE = {
    "title": "Masala Omelette",
    "description": "Quick breakfast",
    "ingredients": [{"name": "Eggs", "quantity": "3"}, {"name": "Onion", "quantity": "1 small"}],
    "steps": [
        {"step_number": 1, "instruction": "Beat eggs with chopped onion."},
        {"step_number": 2, "instruction": "Cook until set."},
    ],
    "cooking_time": 10,
    "difficulty": "easy",
    "category": "breakfast",
    "cuisine": "indian",
}


def _register(username: str) -> dict[str, str]:
    resp = client.post("/api/auth/register", json={
        "name": username.title(),
        "username": username,
        "email": f"{username}@example.com",
        "password": "secret123",
    })
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def _create_recipe(headers: dict[str, str]) -> str:
    resp = client.post("/api/recipes", json=SAMPLE_RECIPE, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


def _review(recipe_id: str, headers: dict[str, str], rating, comment: str | None = None):
    return client.post(f"/api/recipes/{recipe_id}/review", json={"rating": rating, "comment": comment}, headers=headers)


def _stored(recipe_id: str) -> dict:
    return get_store().get(RECIPES, recipe_id)


# ── Aggregation rules ────────────────────────────────────────────────────


def test_average_of_empty_is_zero():
    assert average_rating([]) == 0


def test_upsert_appends_then_overwrites_in_place():
    t0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
    reviews = upsert_review([], "a", 4, "nice", now=t0)
    reviews = upsert_review(reviews, "b", 2, None)
    reviews = upsert_review(reviews, "a", 5, "even better")

    assert [r["user_id"] for r in reviews] == ["a", "b"]
    assert reviews[0]["rating"] == 5
    assert reviews[0]["comment"] == "even better"
    assert reviews[0]["created_at"] == t0


def test_remove_missing_review_is_noop():
    reviews = upsert_review([], "a", 3, None)
    assert remove_review(reviews, "zzz") == reviews


def test_upsert_does_not_mutate_input():
    original = upsert_review([], "a", 3, None)
    upsert_review(original, "a", 1, None)
    assert original[0]["rating"] == 3


# ── API ──────────────────────────────────────────────────────────────────


def test_review_scenario():
    owner = _register("owner")
    alice = _register("alice")
    bob = _register("bob")
    recipe_id = _create_recipe(owner)
    assert _stored(recipe_id)["average_rating"] == 0

    resp = _review(recipe_id, alice, 4)
    assert resp.json()["average_rating"] == 4

    resp = _review(recipe_id, bob, 2)
    assert resp.json()["average_rating"] == 3

    resp = _review(recipe_id, alice, 5)
    assert resp.json()["reviews_count"] == 2
    assert resp.json()["average_rating"] == 3.5

    resp = client.delete(f"/api/recipes/{recipe_id}/review", headers=alice)
    assert resp.status_code == 200
    assert resp.json()["average_rating"] == 2
    assert len(_stored(recipe_id)["reviews"]) == 1


def test_resubmitting_same_review_is_idempotent():
    owner = _register("owner")
    alice = _register("alice")
    recipe_id = _create_recipe(owner)

    first = _review(recipe_id, alice, 4, "tasty").json()
    second = _review(recipe_id, alice, 4, "tasty").json()

    assert first["reviews_count"] == second["reviews_count"] == 1
    assert first["average_rating"] == second["average_rating"] == 4


@pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
def test_valid_ratings_are_stored(rating):
    owner = _register("owner")
    alice = _register("alice")
    recipe_id = _create_recipe(owner)
    assert _review(recipe_id, alice, rating).status_code == 200
    assert _stored(recipe_id)["reviews"][0]["rating"] == rating


@pytest.mark.parametrize("rating", [0, 6, -1, 4.5, "4", None, True])
def test_invalid_ratings_are_rejected_without_mutation(rating):
    owner = _register("owner")
    alice = _register("alice")
    recipe_id = _create_recipe(owner)
    before = _stored(recipe_id)

    resp = _review(recipe_id, alice, rating)

    assert resp.status_code == 400
    after = _stored(recipe_id)
    assert after["reviews"] == [] and after["version"] == before["version"]


def test_missing_rating_is_bad_request():
    owner = _register("owner")
    recipe_id = _create_recipe(owner)
    resp = client.post(f"/api/recipes/{recipe_id}/review", json={"comment": "no stars"}, headers=owner)
    assert resp.status_code == 400


def test_review_unknown_recipe():
    alice = _register("alice")
    assert _review("missing", alice, 3).status_code == 404
    assert client.delete("/api/recipes/missing/review", headers=alice).status_code == 404


def test_delete_without_review_is_silent():
    owner = _register("owner")
    alice = _register("alice")
    recipe_id = _create_recipe(owner)
    resp = client.delete(f"/api/recipes/{recipe_id}/review", headers=alice)
    assert resp.status_code == 200
    assert resp.json()["average_rating"] == 0


def test_review_requires_login():
    owner = _register("owner")
    recipe_id = _create_recipe(owner)
    assert client.post(f"/api/recipes/{recipe_id}/review", json={"rating": 3}).status_code == 401


def test_list_reviews_embeds_authors():
    owner = _register("owner")
    alice = _register("alice")
    recipe_id = _create_recipe(owner)
    _review(recipe_id, alice, 5, "Loved it")

    resp = client.get(f"/api/recipes/{recipe_id}/reviews")
    assert resp.status_code == 200
    reviews = resp.json()
    assert reviews[0]["user"]["username"] == "alice"
    assert reviews[0]["comment"] == "Loved it"


def test_self_review_allowed_by_default():
    owner = _register("owner")
    recipe_id = _create_recipe(owner)
    assert _review(recipe_id, owner, 5).status_code == 200


def test_self_review_can_be_disabled():
    app.dependency_overrides[get_settings] = lambda: Settings(allow_self_review=False)
    owner = _register("owner")
    recipe_id = _create_recipe(owner)

    resp = _review(recipe_id, owner, 5)

    assert resp.status_code == 403
    assert _stored(recipe_id)["reviews"] == []


def test_stale_write_is_rejected():
    owner = _register("owner")
    recipe_id = _create_recipe(owner)
    store = get_store()

    # Two requests read the same version; the second writer loses
    first = store.get(RECIPES, recipe_id)
    second = store.get(RECIPES, recipe_id)
    first["reviews"] = upsert_review(first["reviews"], "a", 4, None)
    second["reviews"] = upsert_review(second["reviews"], "b", 2, None)

    store.replace(RECIPES, first)
    with pytest.raises(ConflictError):
        store.replace(RECIPES, second)
    assert [r["user_id"] for r in store.get(RECIPES, recipe_id)["reviews"]] == ["a"]
