from __future__ import annotations

import logging
from typing import Any

from ..auth.gate import STATUS_ACTIVE, STATUS_SUSPENDED, redact
from ..errors import BadRequestError, NotFoundError
from ..storage import AI_RECIPES, COMPLAINTS, RECIPES, USERS
from ..storage.base import DESCENDING, DocumentStore

logger = logging.getLogger(__name__)


def overview(store: DocumentStore) -> dict[str, int]:
    return {
        "users": store.count(USERS),
        "recipes": store.count(RECIPES),
        "ai_recipes": store.count(AI_RECIPES),
        "complaints": store.count(COMPLAINTS),
    }


def list_users(store: DocumentStore, current: dict[str, Any]) -> list[dict[str, Any]]:
    """All accounts except the calling administrator, newest first."""
    users = store.find(USERS, {"id": {"$ne": current["id"]}}, sort=[("created_at", DESCENDING)])
    return [redact(u) for u in users]


def _get_user(store: DocumentStore, user_id: str) -> dict[str, Any]:
    user = store.get(USERS, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def set_status(store: DocumentStore, current: dict[str, Any], user_id: str, status: str) -> dict[str, Any]:
    user = _get_user(store, user_id)
    if user.get("status") == status:
        already = "blocked" if status == STATUS_SUSPENDED else "active"
        raise BadRequestError(f"User is already {already}")
    if user_id == current["id"] and status == STATUS_SUSPENDED:
        raise BadRequestError("You cannot block your own account")
    store.update(USERS, user_id, {"status": status})
    logger.info("Administrator %s set status of %s to %s", current["id"], user_id, status)
    return {"user_id": user_id, "status": status}


def block_user(store: DocumentStore, current: dict[str, Any], user_id: str) -> dict[str, Any]:
    return set_status(store, current, user_id, STATUS_SUSPENDED)


def unblock_user(store: DocumentStore, current: dict[str, Any], user_id: str) -> dict[str, Any]:
    return set_status(store, current, user_id, STATUS_ACTIVE)


def set_role(store: DocumentStore, current: dict[str, Any], user_id: str, role: str) -> dict[str, Any]:
    if user_id == current["id"]:
        raise BadRequestError("You cannot change your own role")
    _get_user(store, user_id)
    updated = store.update(USERS, user_id, {"role": role})
    logger.info("Administrator %s set role of %s to %s", current["id"], user_id, role)
    return redact(updated)


def delete_recipe(store: DocumentStore, current: dict[str, Any], recipe_id: str) -> None:
    if not store.delete(RECIPES, recipe_id):
        raise NotFoundError("Recipe not found")
    logger.info("Recipe %s deleted by administrator %s", recipe_id, current["id"])
