from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.dependencies import require_user
from ..config import Settings, get_settings
from ..recipes import reviews, service
from ..recipes.models import RecipeCreate, RecipeUpdate, ReviewRequest
from ..storage import get_store
from ..storage.base import DocumentStore

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.post("", status_code=201)
def create_recipe(
    body: RecipeCreate,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return service.create_recipe(store, user, body)


@router.get("")
def list_recipes(store: DocumentStore = Depends(get_store)) -> list[dict]:
    return service.list_recipes(store)


# Fixed paths must be declared before /{recipe_id}
@router.get("/saved")
def saved_recipes(
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> list[dict]:
    return service.saved_recipes(store, user)


@router.get("/user/{user_id}")
def recipes_by_user(user_id: str, store: DocumentStore = Depends(get_store)) -> list[dict]:
    return service.recipes_by_user(store, user_id)


@router.get("/{recipe_id}")
def get_recipe(recipe_id: str, store: DocumentStore = Depends(get_store)) -> dict:
    return service.recipe_detail(store, recipe_id)


@router.put("/{recipe_id}")
def update_recipe(
    recipe_id: str,
    body: RecipeUpdate,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return service.update_recipe(store, user, recipe_id, body)


@router.delete("/{recipe_id}")
def delete_recipe(
    recipe_id: str,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    service.delete_recipe(store, user, recipe_id)
    return {"message": "Recipe deleted successfully", "recipe_id": recipe_id}


# ── Saved recipes ────────────────────────────────────────────────────────


@router.post("/{recipe_id}/save")
def save_recipe(
    recipe_id: str,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    saved = service.save_recipe(store, user, recipe_id)
    return {"message": "Recipe saved successfully", "saved_recipes": saved}


@router.post("/{recipe_id}/unsave")
def unsave_recipe(
    recipe_id: str,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    saved = service.unsave_recipe(store, user, recipe_id)
    return {"message": "Recipe removed from saved recipes", "saved_recipes": saved}


# ── Reviews ──────────────────────────────────────────────────────────────


@router.post("/{recipe_id}/review")
def submit_review(
    recipe_id: str,
    body: ReviewRequest,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> dict:
    recipe = reviews.submit_review(store, user, recipe_id, body.rating, body.comment, settings)
    return {
        "message": "Review submitted successfully",
        "average_rating": recipe["average_rating"],
        "reviews_count": len(recipe["reviews"]),
    }


@router.get("/{recipe_id}/reviews")
def list_reviews(recipe_id: str, store: DocumentStore = Depends(get_store)) -> list[dict]:
    return reviews.list_reviews(store, recipe_id)


@router.delete("/{recipe_id}/review")
def delete_review(
    recipe_id: str,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    recipe = reviews.delete_review(store, user, recipe_id)
    return {
        "message": "Review deleted successfully",
        "average_rating": recipe["average_rating"],
        "reviews_count": len(recipe["reviews"]),
    }
