from __future__ import annotations

from fastapi import APIRouter, Depends

from ..auth.dependencies import require_user
from ..llm.config import LLMConfig, get_llm_config
from ..llm.groq_client import generate_recipe
from ..recipes import ai_recipes
from ..recipes.models import GeneratedRecipe, GenerateRequest
from ..storage import get_store
from ..storage.base import DocumentStore

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/recipe")
def generate(
    body: GenerateRequest,
    user: dict = Depends(require_user),
    config: LLMConfig = Depends(get_llm_config),
) -> dict:
    return generate_recipe(body.ingredients, config)


@router.post("/recipe/save", status_code=201)
def save(
    body: GeneratedRecipe,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return ai_recipes.save_ai_recipe(store, user, body)


@router.get("/recipes")
def list_mine(
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> list[dict]:
    return ai_recipes.list_own(store, user)


@router.get("/recipes/{recipe_id}")
def get_mine(
    recipe_id: str,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    return ai_recipes.get_own(store, user, recipe_id)


@router.delete("/recipe/{recipe_id}")
def delete_mine(
    recipe_id: str,
    user: dict = Depends(require_user),
    store: DocumentStore = Depends(get_store),
) -> dict:
    ai_recipes.delete_own(store, user, recipe_id)
    return {"message": "Recipe deleted successfully"}
