from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class Category(str, Enum):
    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"
    dessert = "dessert"
    beverage = "beverage"


class Cuisine(str, Enum):
    indian = "indian"
    italian = "italian"
    chinese = "chinese"
    mexican = "mexican"
    american = "american"
    thai = "thai"
    other = "other"


class Ingredient(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    quantity: str = Field(..., min_length=1, max_length=50, description='Free text, e.g. "2 cups"')

    @field_validator("quantity", mode="before")
    @classmethod
    def _quantity_as_text(cls, v: Any) -> Any:
        # Generated recipes sometimes send bare numbers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class Step(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    step_number: int = Field(..., ge=1)
    instruction: str = Field(..., min_length=1, max_length=2000)


class RecipeCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    ingredients: list[Ingredient] = Field(..., min_length=1)
    steps: list[Step] = Field(..., min_length=1)
    image: str | None = None
    cooking_time: int = Field(..., gt=0, description="Minutes")
    difficulty: Difficulty = Difficulty.easy
    category: Category
    cuisine: Cuisine


class RecipeUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=5000)
    ingredients: list[Ingredient] | None = Field(default=None, min_length=1)
    steps: list[Step] | None = Field(default=None, min_length=1)
    image: str | None = None
    cooking_time: int | None = Field(default=None, gt=0)
    difficulty: Difficulty | None = None
    category: Category | None = None
    cuisine: Cuisine | None = None


class ReviewRequest(BaseModel):
    rating: int = Field(..., ge=1, le=5, strict=True)
    comment: str | None = Field(default=None, max_length=2000)


class GeneratedRecipe(BaseModel):
    """Recipe shape produced by the AI generator; also the body for saving one."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    ingredients: list[Ingredient] = Field(..., min_length=1)
    steps: list[Step] = Field(..., min_length=1)
    cooking_time: int | None = Field(default=None, gt=0)
    difficulty: Difficulty | None = None
    category: Category | None = None
    cuisine: Cuisine | None = None


class GenerateRequest(BaseModel):
    ingredients: list[str] = Field(..., min_length=1, max_length=50)

    @field_validator("ingredients")
    @classmethod
    def _non_blank(cls, v: list[str]) -> list[str]:
        cleaned = [i.strip() for i in v if i and i.strip()]
        if not cleaned:
            raise ValueError("Ingredients array is required")
        return cleaned
