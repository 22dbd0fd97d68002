from __future__ import annotations

from fastapi import APIRouter, Depends

from ..admin import service
from ..auth.dependencies import require_admin
from ..auth.models import RoleUpdate
from ..recipes import ai_recipes
from ..storage import get_store
from ..storage.base import DocumentStore

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/overview")
def overview(
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return service.overview(store)


# ── Accounts ─────────────────────────────────────────────────────────────


@router.get("/users")
def list_users(
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> list[dict]:
    return service.list_users(store, user)


@router.put("/users/{user_id}/block")
def block_user(
    user_id: str,
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return {"message": "User blocked successfully", **service.block_user(store, user, user_id)}


@router.put("/users/{user_id}/unblock")
def unblock_user(
    user_id: str,
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return {"message": "User unblocked successfully", **service.unblock_user(store, user, user_id)}


@router.put("/users/{user_id}/role")
def set_role(
    user_id: str,
    body: RoleUpdate,
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return service.set_role(store, user, user_id, body.role)


# ── Content moderation ───────────────────────────────────────────────────


@router.delete("/recipes/{recipe_id}")
def delete_recipe(
    recipe_id: str,
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> dict:
    service.delete_recipe(store, user, recipe_id)
    return {"message": "Recipe deleted successfully by admin", "recipe_id": recipe_id}


@router.get("/ai-recipes")
def list_ai_recipes(
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> list[dict]:
    return ai_recipes.list_all(store)


@router.delete("/ai-recipes/{recipe_id}")
def delete_ai_recipe(
    recipe_id: str,
    user: dict = Depends(require_admin),
    store: DocumentStore = Depends(get_store),
) -> dict:
    ai_recipes.delete_any(store, user, recipe_id)
    return {"message": "AI recipe deleted successfully", "recipe_id": recipe_id}
