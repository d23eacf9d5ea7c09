"""Ingredient nutrient calculations."""

from dataclasses import dataclass
from uuid import UUID

from diet_planner.domain.catalog import FoodItem
from diet_planner.domain.dishes import Ingredient, NutrientTotals
from diet_planner.domain.errors import BusinessRuleViolation
from diet_planner.services.catalog import FoodCatalogService


@dataclass
class IngredientCalculator:
    """Builds ingredients whose totals derive from food and quantity."""

    catalog: FoodCatalogService

    def build(self, food_item_id: UUID, quantity: float) -> Ingredient:
        """Resolve a food item and compute the ingredient totals."""
        food = self.catalog.get_food_item(food_item_id)
        return calculate(food, quantity)

    def with_quantity(self, ingredient: Ingredient, quantity: float) -> Ingredient:
        """Return the ingredient with a new quantity and recomputed totals."""
        return self.build(ingredient.food_item_id, quantity)

    def with_food(self, ingredient: Ingredient, food_item_id: UUID) -> Ingredient:
        """Return the ingredient pointing at another food item."""
        return self.build(food_item_id, ingredient.quantity)


def calculate(food: FoodItem, quantity: float) -> Ingredient:
    """Compute ``nutrient_per_100 * quantity / 100`` for each macro."""
    if quantity < 0:
        raise BusinessRuleViolation(
            f"Quantity for {food.name} must not be negative: {quantity}",
            kind="negative_quantity",
        )
    factor = quantity / 100.0
    return Ingredient(
        food_item_id=food.id,
        food_name=food.name,
        quantity=quantity,
        totals=NutrientTotals(
            protein=food.protein * factor,
            fat=food.fat * factor,
            kcal=food.calories * factor,
            carbohydrate=food.carbohydrates * factor,
        ),
    )
