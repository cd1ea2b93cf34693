"""Canonical meal data shared by the widget and the analysis tool.

Payloads come from language models and host applications, so every level is
lenient: a malformed field degrades to its default instead of rejecting the
surrounding meal.
"""

import math
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


def nutrient_amount(value: object) -> float | None:
    """Return a finite, non-negative amount or ``None``."""
    if isinstance(value, bool):
        return None
    try:
        amount = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(amount) or amount < 0:
        return None
    return amount


def _text_or_none(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _mapping_or_empty(value: object) -> object:
    if isinstance(value, (Mapping, BaseModel)):
        return value
    return {}


def _mappings_only(value: object) -> list[object]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, (Mapping, BaseModel))]


class Nutrients(BaseModel):
    """Calories plus protein, carbs and fat in grams; ``None`` when unusable."""

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None

    @field_validator("calories", "protein", "carbs", "fat", mode="before")
    @classmethod
    def _usable_amount(cls, value: object) -> float | None:
        return nutrient_amount(value)


class Ingredient(BaseModel):
    """Single ingredient inside a logged meal."""

    name: str = ""
    brand: str | None = None
    serving_info: str | None = None
    nutrients: Nutrients = Field(default_factory=Nutrients)

    @field_validator("name", mode="before")
    @classmethod
    def _name_text(cls, value: object) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("brand", "serving_info", mode="before")
    @classmethod
    def _optional_text(cls, value: object) -> str | None:
        return _text_or_none(value)

    @field_validator("nutrients", mode="before")
    @classmethod
    def _nutrient_mapping(cls, value: object) -> object:
        return _mapping_or_empty(value)


class Meal(BaseModel):
    """Logged meal with producer-supplied totals."""

    meal_name: str = ""
    meal_size: str | None = None
    ingredients: list[Ingredient] = Field(default_factory=list)
    total_nutrients: Nutrients = Field(default_factory=Nutrients)

    @field_validator("meal_name", mode="before")
    @classmethod
    def _name_text(cls, value: object) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("meal_size", mode="before")
    @classmethod
    def _size_text(cls, value: object) -> str | None:
        return _text_or_none(value)

    @field_validator("ingredients", mode="before")
    @classmethod
    def _ingredient_mappings(cls, value: object) -> list[object]:
        return _mappings_only(value)

    @field_validator("total_nutrients", mode="before")
    @classmethod
    def _nutrient_mapping(cls, value: object) -> object:
        return _mapping_or_empty(value)


class MealData(BaseModel):
    """Normalized analysis result consumed by rendering."""

    model_config = ConfigDict(populate_by_name=True)

    daily_totals: Nutrients | None = Field(default=None, alias="dailyTotals")
    logged_meals: list[Meal] | None = Field(default=None, alias="loggedMeals")
    error: str | None = None

    @field_validator("daily_totals", mode="before")
    @classmethod
    def _totals_mapping(cls, value: object) -> object:
        return value if isinstance(value, (Mapping, BaseModel)) else None

    @field_validator("logged_meals", mode="before")
    @classmethod
    def _meal_mappings(cls, value: object) -> list[object] | None:
        if value is None:
            return None
        return _mappings_only(value)

    @field_validator("error", mode="before")
    @classmethod
    def _error_text(cls, value: object) -> str | None:
        return _text_or_none(value)
