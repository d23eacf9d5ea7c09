"""Dish and ingredient domain models."""

from dataclasses import dataclass, field
from typing import Literal
from uuid import UUID


@dataclass(frozen=True)
class NutrientTotals:
    """Absolute macro totals for an ingredient or dish."""

    protein: float = 0.0
    fat: float = 0.0
    kcal: float = 0.0
    carbohydrate: float = 0.0

    def __add__(self, other: "NutrientTotals") -> "NutrientTotals":
        return NutrientTotals(
            protein=self.protein + other.protein,
            fat=self.fat + other.fat,
            kcal=self.kcal + other.kcal,
            carbohydrate=self.carbohydrate + other.carbohydrate,
        )


ZERO_TOTALS = NutrientTotals()


@dataclass(frozen=True)
class Ingredient:
    """A quantity of a food item with totals derived from it.

    Build these through ``IngredientCalculator`` so totals always match the
    referenced food and quantity.
    """

    food_item_id: UUID
    food_name: str
    quantity: float
    totals: NutrientTotals


@dataclass(frozen=True)
class DishContent:
    """Shared data shape of every dish variant."""

    name: str
    ingredients: tuple[Ingredient, ...] = ()
    recipe: str = ""
    totals: NutrientTotals = ZERO_TOTALS

    def food_item_ids(self) -> set[UUID]:
        """Return the ids of every food item used by the dish."""
        return {ingredient.food_item_id for ingredient in self.ingredients}


@dataclass(frozen=True)
class PlanDish:
    """Dish embedded in a meal of a specific plan."""

    id: UUID
    content: DishContent
    kind: Literal["plan"] = field(default="plan", init=False)


@dataclass(frozen=True)
class PredeterminedDish:
    """Reusable dish template owned by a nutritionist."""

    id: UUID
    nutritionist_id: UUID
    content: DishContent
    kind: Literal["predetermined"] = field(default="predetermined", init=False)


Dish = PlanDish | PredeterminedDish
