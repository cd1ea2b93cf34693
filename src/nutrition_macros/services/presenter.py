"""Display values for meal data in the ready state."""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from nutrition_macros.domain.meals import Ingredient, Meal, MealData, Nutrients


MISSING_VALUE = "-"


def round_nutrient(value: float | None) -> int | None:
    """Round half away from zero using the value's decimal representation."""
    if value is None:
        return None
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class NutrientFigures:
    """Rounded nutrient values; ``None`` marks an unusable amount."""

    calories: int | None
    protein: int | None
    carbs: int | None
    fat: int | None

    @classmethod
    def from_nutrients(cls, nutrients: Nutrients) -> "NutrientFigures":
        return cls(
            calories=round_nutrient(nutrients.calories),
            protein=round_nutrient(nutrients.protein),
            carbs=round_nutrient(nutrients.carbs),
            fat=round_nutrient(nutrients.fat),
        )

    def totals_cells(self) -> list[tuple[str, str]]:
        """Daily totals cells: calories bare, macros suffixed with grams."""
        return [
            ("Calories", _display(self.calories)),
            ("Protein", _display(self.protein, "g")),
            ("Carbs", _display(self.carbs, "g")),
            ("Fat", _display(self.fat, "g")),
        ]

    def meal_cells(self) -> list[tuple[str, str]]:
        """Meal card cells with the unit carried in the label."""
        return [
            ("Calories", _display(self.calories)),
            ("Protein (g)", _display(self.protein)),
            ("Carbs (g)", _display(self.carbs)),
            ("Fat (g)", _display(self.fat)),
        ]

    def values(self) -> list[str]:
        return [
            _display(value)
            for value in (self.calories, self.protein, self.carbs, self.fat)
        ]


def _display(value: int | None, unit: str = "") -> str:
    return MISSING_VALUE if value is None else f"{value}{unit}"


@dataclass(frozen=True)
class IngredientView:
    """Single line of a meal breakdown."""

    name: str
    brand: str | None
    serving_info: str | None
    nutrients: NutrientFigures

    @property
    def heading(self) -> str:
        if not self.serving_info:
            return self.name
        return f"{self.name} ({self.serving_info})"


@dataclass(frozen=True)
class MealView:
    """Meal card."""

    index: int
    name: str
    size: str | None
    totals: NutrientFigures
    ingredients: tuple[IngredientView, ...]
    has_breakdown: bool
    breakdown_open: bool


@dataclass(frozen=True)
class MealDataView:
    """Daily totals card plus meal cards in producer order."""

    daily_totals: NutrientFigures | None
    meals: tuple[MealView, ...]


def present_ingredient(ingredient: Ingredient) -> IngredientView:
    return IngredientView(
        name=ingredient.name,
        brand=ingredient.brand,
        serving_info=ingredient.serving_info,
        nutrients=NutrientFigures.from_nutrients(ingredient.nutrients),
    )


def present_meal(meal: Meal, index: int, *, breakdown_open: bool = False) -> MealView:
    """Build a meal card; the breakdown exists only for multi-ingredient meals."""
    has_breakdown = len(meal.ingredients) > 1
    return MealView(
        index=index,
        name=meal.meal_name,
        size=meal.meal_size or None,
        totals=NutrientFigures.from_nutrients(meal.total_nutrients),
        ingredients=tuple(present_ingredient(item) for item in meal.ingredients),
        has_breakdown=has_breakdown,
        breakdown_open=has_breakdown and breakdown_open,
    )


def present_meal_data(
    meal_data: MealData, expanded: Mapping[int, bool] | None = None
) -> MealDataView:
    """Present meal data; ``expanded`` maps meal position to an open breakdown."""
    toggles = expanded or {}
    daily_totals = (
        NutrientFigures.from_nutrients(meal_data.daily_totals)
        if meal_data.daily_totals is not None
        else None
    )
    meals = tuple(
        present_meal(meal, index, breakdown_open=toggles.get(index, False))
        for index, meal in enumerate(meal_data.logged_meals or [])
    )
    return MealDataView(daily_totals=daily_totals, meals=meals)


def expanded_from_indices(indices: list[int] | None) -> dict[int, bool]:
    """Build a toggle mapping from the positions of open breakdowns."""
    return {index: True for index in indices or []}
