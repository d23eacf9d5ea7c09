"""Read-only lookups over the food catalog."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from diet_planner.domain.catalog import DietaryFilter, FilterFood, FoodItem
from diet_planner.domain.dishes import PredeterminedDish
from diet_planner.domain.errors import NotFoundError


class CatalogRepository(Protocol):
    """Persistence interface for catalog reference data."""

    def find_food_item(self, food_item_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""

    def list_food_items(self, food_item_ids: list[UUID]) -> list[FoodItem]:
        """Return the food items that exist among the given ids."""

    def find_predetermined_dishes_by_nutritionist(
        self, nutritionist_id: UUID
    ) -> list[PredeterminedDish]:
        """Return a nutritionist's dish templates in catalog order."""

    def find_filter(self, filter_id: UUID) -> DietaryFilter | None:
        """Return a dietary filter by id, if present."""


@dataclass
class FoodCatalogService:
    """Application service for catalog lookups."""

    repository: CatalogRepository

    def get_food_item(self, food_item_id: UUID) -> FoodItem:
        """Return a food item or raise when it does not exist."""
        food = self.repository.find_food_item(food_item_id)
        if food is None:
            raise NotFoundError(f"Food item {food_item_id} not found")
        return food

    def get_filter(self, filter_id: UUID) -> DietaryFilter:
        """Return a dietary filter or raise when it does not exist."""
        dietary_filter = self.repository.find_filter(filter_id)
        if dietary_filter is None:
            raise NotFoundError(f"Dietary filter {filter_id} not found")
        return dietary_filter

    def find_filter(self, filter_id: UUID | None) -> DietaryFilter | None:
        if filter_id is None:
            return None
        return self.repository.find_filter(filter_id)

    def predetermined_dishes(self, nutritionist_id: UUID) -> list[PredeterminedDish]:
        return self.repository.find_predetermined_dishes_by_nutritionist(
            nutritionist_id
        )

    def foods_in_filter(self, filter_id: UUID) -> list[FilterFood]:
        """List id/name pairs of the foods in a filter, sorted by name."""
        dietary_filter = self.get_filter(filter_id)
        foods = self.repository.list_food_items(sorted(dietary_filter.food_item_ids))
        return sorted(
            (FilterFood(id=food.id, name=food.name) for food in foods),
            key=lambda item: item.name.lower(),
        )
