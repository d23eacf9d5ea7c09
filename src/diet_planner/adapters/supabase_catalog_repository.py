"""Supabase-backed food catalog repository."""

from dataclasses import dataclass, fields
from uuid import UUID

from supabase import Client

from diet_planner.adapters.serialization import parse_dish_content
from diet_planner.domain.catalog import DietaryFilter, FoodItem
from diet_planner.domain.dishes import PredeterminedDish
from diet_planner.services.catalog import CatalogRepository

_NUTRIENT_FIELDS = tuple(
    item.name for item in fields(FoodItem) if item.name not in {"id", "name", "state"}
)


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase implementation for catalog lookups."""

    client: Client

    def find_food_item(self, food_item_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""
        response = (
            self.client.table("food_items")
            .select("*")
            .eq("id", str(food_item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def list_food_items(self, food_item_ids: list[UUID]) -> list[FoodItem]:
        """Return the food items matching the ids."""
        if not food_item_ids:
            return []
        response = (
            self.client.table("food_items")
            .select("*")
            .in_("id", [str(food_id) for food_id in food_item_ids])
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]

    def find_predetermined_dishes_by_nutritionist(
        self, nutritionist_id: UUID
    ) -> list[PredeterminedDish]:
        """Return a nutritionist's dish templates ordered by name."""
        response = (
            self.client.table("predetermined_dishes")
            .select("*")
            .eq("nutritionist_id", str(nutritionist_id))
            .order("name", desc=False)
            .execute()
        )
        return [
            PredeterminedDish(
                id=UUID(str(row["id"])),
                nutritionist_id=UUID(str(row["nutritionist_id"])),
                content=parse_dish_content(row),
            )
            for row in response.data or []
        ]

    def find_filter(self, filter_id: UUID) -> DietaryFilter | None:
        """Return a dietary filter by id, if present."""
        response = (
            self.client.table("dietary_filters")
            .select("*")
            .eq("id", str(filter_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return DietaryFilter(
            id=UUID(str(row["id"])),
            name=str(row.get("name", "")),
            description=row.get("description"),
            food_item_ids=frozenset(
                UUID(str(food_id)) for food_id in row.get("food_item_ids") or []
            ),
        )


def _parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a food row; missing nutrient columns read as zero."""
    nutrients = {name: float(row.get(name) or 0.0) for name in _NUTRIENT_FIELDS}
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        state=str(row.get("state", "")),
        **nutrients,
    )
