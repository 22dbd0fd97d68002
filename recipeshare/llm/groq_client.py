from __future__ import annotations

import json
import logging
from typing import Any

from groq import Groq
from pydantic import ValidationError

from ..errors import ServerError
from ..recipes.models import Category, Cuisine, Difficulty, GeneratedRecipe
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)


def _choices(enum_cls) -> str:
    return " | ".join(e.value for e in enum_cls)


SYSTEM_PROMPT = (
    "You are a professional chef AI. "
    "Generate exactly ONE recipe using ONLY the ingredients the user lists. "
    "You may add basic items like salt, pepper, oil, or water if necessary.\n\n"
    "Return ONLY valid JSON, with no markdown and no extra text, in this exact format:\n"
    "{\n"
    '  "title": "string",\n'
    '  "description": "string",\n'
    '  "ingredients": [{"name": "string", "quantity": "string"}],\n'
    '  "steps": [{"step_number": number, "instruction": "string"}],\n'
    '  "cooking_time": number,\n'
    f'  "difficulty": "{_choices(Difficulty)}",\n'
    f'  "category": "{_choices(Category)}",\n'
    f'  "cuisine": "{_choices(Cuisine)}"\n'
    "}"
)


def _build_user_message(ingredients: list[str]) -> str:
    return "INGREDIENTS USER HAS:\n" + ", ".join(ingredients)


def parse_recipe(content: str) -> dict[str, Any]:
    """
    Validate raw model output against the recipe schema.

    Raises ``ServerError`` with the raw text attached when the output is not
    JSON or is missing required fields.
    """
    try:
        parsed = json.loads(content)
    except json.JSONDecodeError:
        raise ServerError("AI returned invalid JSON", raw=content)

    if not isinstance(parsed, dict):
        raise ServerError("AI response missing required fields", raw=content)
    try:
        recipe = GeneratedRecipe.model_validate(parsed)
    except ValidationError:
        raise ServerError("AI response missing required fields", raw=content)
    return recipe.model_dump(mode="json")


def generate_recipe(ingredients: list[str], config: LLMConfig = DEFAULT_LLM_CONFIG) -> dict[str, Any]:
    """Ask Groq for one recipe built from ``ingredients``. Nothing is persisted."""
    if not config.enabled or not config.api_key:
        raise ServerError("AI recipe generation is not configured")

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": _build_user_message(ingredients)},
            ],
            max_tokens=config.max_tokens,
            temperature=config.temperature,
            response_format={"type": "json_object"},
        )
        content = response.choices[0].message.content or ""
    except Exception as exc:
        logger.warning("Groq recipe generation call failed", exc_info=True)
        raise ServerError("Failed to generate recipe", error=f"{type(exc).__name__}: {exc}") from exc

    try:
        return parse_recipe(content)
    except ServerError:
        logger.warning("Groq returned an unusable recipe: %.200s", content)
        raise
