from __future__ import annotations

import logging
from typing import Any

from ..auth.gate import ROLE_ADMIN
from ..auth.users import account_summary
from ..errors import BadRequestError, ForbiddenError, NotFoundError
from ..storage import RECIPES, USERS
from ..storage.base import DESCENDING, DocumentStore
from .models import RecipeCreate, RecipeUpdate
from .reviews import present_reviews

logger = logging.getLogger(__name__)

_NEWEST_FIRST = [("created_at", DESCENDING)]


def present_recipe(
    store: DocumentStore,
    recipe: dict[str, Any],
    with_reviewers: bool = False,
    owners: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Replace ``created_by`` with the owner's public fields."""
    owners = owners if owners is not None else {}
    owner_id = recipe.get("created_by")
    if owner_id not in owners:
        owners[owner_id] = account_summary(store.get(USERS, owner_id), "username", "image")
    out = {**recipe, "created_by": owners[owner_id]}
    if with_reviewers:
        out["reviews"] = present_reviews(store, recipe.get("reviews", []))
    return out


def _present_all(store: DocumentStore, recipes: list[dict[str, Any]]) -> list[dict[str, Any]]:
    owners: dict[str, Any] = {}
    return [present_recipe(store, r, owners=owners) for r in recipes]


def get_recipe(store: DocumentStore, recipe_id: str) -> dict[str, Any]:
    recipe = store.get(RECIPES, recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return recipe


def _ensure_can_modify(current: dict[str, Any], recipe: dict[str, Any]) -> None:
    if recipe.get("created_by") != current["id"] and current.get("role") != ROLE_ADMIN:
        raise ForbiddenError("Not authorized")


def create_recipe(store: DocumentStore, current: dict[str, Any], payload: RecipeCreate) -> dict[str, Any]:
    doc = payload.model_dump(mode="json")
    doc.update({"created_by": current["id"], "reviews": [], "average_rating": 0.0})
    recipe = store.insert(RECIPES, doc)
    return present_recipe(store, recipe)


def list_recipes(store: DocumentStore) -> list[dict[str, Any]]:
    return _present_all(store, store.find(RECIPES, sort=_NEWEST_FIRST))


def recipes_by_user(store: DocumentStore, user_id: str) -> list[dict[str, Any]]:
    return _present_all(store, store.find(RECIPES, {"created_by": user_id}, sort=_NEWEST_FIRST))


def recipe_detail(store: DocumentStore, recipe_id: str) -> dict[str, Any]:
    return present_recipe(store, get_recipe(store, recipe_id), with_reviewers=True)


def update_recipe(
    store: DocumentStore,
    current: dict[str, Any],
    recipe_id: str,
    payload: RecipeUpdate,
) -> dict[str, Any]:
    recipe = get_recipe(store, recipe_id)
    _ensure_can_modify(current, recipe)
    fields = payload.model_dump(mode="json", exclude_unset=True)
    # Required fields cannot be cleared through an explicit null
    fields = {k: v for k, v in fields.items() if v is not None or k == "image"}
    updated = store.update(RECIPES, recipe_id, fields) if fields else recipe
    if updated is None:
        raise NotFoundError("Recipe not found")
    return present_recipe(store, updated)


def delete_recipe(store: DocumentStore, current: dict[str, Any], recipe_id: str) -> None:
    recipe = get_recipe(store, recipe_id)
    _ensure_can_modify(current, recipe)
    store.delete(RECIPES, recipe_id)
    if recipe.get("created_by") != current["id"]:
        logger.info("Recipe %s deleted by administrator %s", recipe_id, current["id"])


# ── Saved recipes ────────────────────────────────────────────────────────


def _write_saved(store: DocumentStore, account_id: str, change) -> list[str]:
    """Re-read the account and compare-and-set its saved list; a concurrent write gets a 409."""
    account = store.get(USERS, account_id)
    if account is None:
        raise NotFoundError("User not found")
    account["saved_recipes"] = change(list(account.get("saved_recipes", [])))
    if store.replace(USERS, account) is None:
        raise NotFoundError("User not found")
    return account["saved_recipes"]


def save_recipe(store: DocumentStore, current: dict[str, Any], recipe_id: str) -> list[str]:
    get_recipe(store, recipe_id)

    def add(saved: list[str]) -> list[str]:
        if recipe_id in saved:
            raise BadRequestError("Recipe already saved")
        return saved + [recipe_id]

    return _write_saved(store, current["id"], add)


def unsave_recipe(store: DocumentStore, current: dict[str, Any], recipe_id: str) -> list[str]:
    return _write_saved(store, current["id"], lambda saved: [rid for rid in saved if rid != recipe_id])


def saved_recipes(store: DocumentStore, current: dict[str, Any]) -> list[dict[str, Any]]:
    """Saved recipes that still exist; deleted ones are skipped."""
    ids = current.get("saved_recipes", [])
    if not ids:
        return []
    return _present_all(store, store.find(RECIPES, {"id": {"$in": ids}}, sort=_NEWEST_FIRST))
