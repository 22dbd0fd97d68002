"""
Review aggregation.

A recipe holds at most one review per account. Submitting again overwrites
the existing entry in place (same position, same ``created_at``); deleting
filters the caller's entry out and is a no-op when there is none. After
every change ``average_rating`` is recomputed as the plain mean of the
current ratings, and is exactly 0 when there are no reviews.

Writes go through ``DocumentStore.replace``, which refuses to overwrite a
recipe that changed since it was read. The losing request gets a 409 rather
than silently dropping another account's review.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from ..auth.users import account_summary
from ..config import DEFAULT_SETTINGS, Settings
from ..errors import ForbiddenError, NotFoundError
from ..storage import RECIPES, USERS
from ..storage.base import DocumentStore

logger = logging.getLogger(__name__)


def average_rating(reviews: list[dict[str, Any]]) -> float:
    if not reviews:
        return 0.0
    return sum(r["rating"] for r in reviews) / len(reviews)


def upsert_review(
    reviews: list[dict[str, Any]],
    user_id: str,
    rating: int,
    comment: str | None,
    now: datetime | None = None,
) -> list[dict[str, Any]]:
    """Return a new review list with ``user_id``'s entry inserted or overwritten."""
    updated = [dict(r) for r in reviews]
    for review in updated:
        if review["user_id"] == user_id:
            review["rating"] = rating
            review["comment"] = comment
            return updated
    updated.append({
        "user_id": user_id,
        "rating": rating,
        "comment": comment,
        "created_at": now or datetime.now(timezone.utc),
    })
    return updated


def remove_review(reviews: list[dict[str, Any]], user_id: str) -> list[dict[str, Any]]:
    return [dict(r) for r in reviews if r["user_id"] != user_id]


def _load_recipe(store: DocumentStore, recipe_id: str) -> dict[str, Any]:
    recipe = store.get(RECIPES, recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return recipe


def _persist(store: DocumentStore, recipe: dict[str, Any], reviews: list[dict[str, Any]]) -> dict[str, Any]:
    recipe["reviews"] = reviews
    recipe["average_rating"] = average_rating(reviews)
    saved = store.replace(RECIPES, recipe)
    if saved is None:
        raise NotFoundError("Recipe not found")
    return saved


def submit_review(
    store: DocumentStore,
    current: dict[str, Any],
    recipe_id: str,
    rating: int,
    comment: str | None,
    settings: Settings = DEFAULT_SETTINGS,
) -> dict[str, Any]:
    recipe = _load_recipe(store, recipe_id)
    if not settings.allow_self_review and recipe.get("created_by") == current["id"]:
        raise ForbiddenError("You cannot review your own recipe")
    reviews = upsert_review(recipe.get("reviews", []), current["id"], rating, comment)
    saved = _persist(store, recipe, reviews)
    logger.debug("Review by %s on recipe %s, average now %s", current["id"], recipe_id, saved["average_rating"])
    return saved


def delete_review(store: DocumentStore, current: dict[str, Any], recipe_id: str) -> dict[str, Any]:
    recipe = _load_recipe(store, recipe_id)
    reviews = remove_review(recipe.get("reviews", []), current["id"])
    return _persist(store, recipe, reviews)


def present_reviews(store: DocumentStore, reviews: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Embed each reviewer's ``username`` and ``image``."""
    authors: dict[str, Any] = {}
    out = []
    for review in reviews:
        uid = review["user_id"]
        if uid not in authors:
            authors[uid] = account_summary(store.get(USERS, uid), "username", "image")
        out.append({**review, "user": authors[uid]})
    return out


def list_reviews(store: DocumentStore, recipe_id: str) -> list[dict[str, Any]]:
    recipe = _load_recipe(store, recipe_id)
    return present_reviews(store, recipe.get("reviews", []))
