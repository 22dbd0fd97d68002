from __future__ import annotations

import logging
from typing import Any

from ..auth.users import account_summary
from ..errors import NotFoundError
from ..storage import AI_RECIPES, USERS
from ..storage.base import DESCENDING, DocumentStore
from .models import GeneratedRecipe

logger = logging.getLogger(__name__)

AI_SOURCE = "ai"
_NEWEST_FIRST = [("created_at", DESCENDING)]


def save_ai_recipe(store: DocumentStore, current: dict[str, Any], recipe: GeneratedRecipe) -> dict[str, Any]:
    doc = recipe.model_dump(mode="json")
    doc.update({"created_by": current["id"], "source": AI_SOURCE})
    return store.insert(AI_RECIPES, doc)


def list_own(store: DocumentStore, current: dict[str, Any]) -> list[dict[str, Any]]:
    return store.find(AI_RECIPES, {"created_by": current["id"]}, sort=_NEWEST_FIRST)


def get_own(store: DocumentStore, current: dict[str, Any], recipe_id: str) -> dict[str, Any]:
    recipe = store.get(AI_RECIPES, recipe_id)
    if recipe is None or recipe.get("created_by") != current["id"]:
        raise NotFoundError("Recipe not found")
    return recipe


def delete_own(store: DocumentStore, current: dict[str, Any], recipe_id: str) -> None:
    get_own(store, current, recipe_id)
    store.delete(AI_RECIPES, recipe_id)


def list_all(store: DocumentStore) -> list[dict[str, Any]]:
    owners: dict[str, Any] = {}
    out = []
    for recipe in store.find(AI_RECIPES, sort=_NEWEST_FIRST):
        owner_id = recipe.get("created_by")
        if owner_id not in owners:
            owners[owner_id] = account_summary(store.get(USERS, owner_id), "username")
        out.append({**recipe, "created_by": owners[owner_id]})
    return out


def delete_any(store: DocumentStore, current: dict[str, Any], recipe_id: str) -> None:
    if not store.delete(AI_RECIPES, recipe_id):
        raise NotFoundError("AI recipe not found")
    logger.info("AI recipe %s deleted by administrator %s", recipe_id, current["id"])
