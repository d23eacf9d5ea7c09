"""Food catalog domain models."""

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class FoodItem:
    """Food reference data with nutrient values per 100 units."""

    id: UUID
    name: str
    state: str
    calories: float
    carbohydrates: float = 0.0
    fat: float = 0.0
    protein: float = 0.0
    water: float = 0.0
    unspecified: float = 0.0
    vitamin_a: float = 0.0
    vitamin_b1: float = 0.0
    vitamin_b2: float = 0.0
    vitamin_c: float = 0.0
    niacin: float = 0.0
    copper: float = 0.0
    potassium: float = 0.0
    sodium: float = 0.0
    sulfur: float = 0.0
    calcium: float = 0.0
    phosphorus: float = 0.0
    iron: float = 0.0
    magnesium: float = 0.0
    chlorine: float = 0.0
    methionine: float = 0.0
    lysine: float = 0.0
    leucine: float = 0.0
    isoleucine: float = 0.0
    threonine: float = 0.0
    tryptophan: float = 0.0
    phenylalanine: float = 0.0
    valine: float = 0.0
    acids: float = 0.0
    alkalines: float = 0.0


@dataclass(frozen=True)
class DietaryFilter:
    """Named set of food items applied to a diet plan."""

    id: UUID
    name: str
    description: str | None = None
    food_item_ids: frozenset[UUID] = field(default_factory=frozenset)


@dataclass(frozen=True)
class FilterFood:
    """Id/name pair for a food listed in a filter."""

    id: UUID
    name: str
