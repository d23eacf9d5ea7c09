"""Domain models for statistics and shopping lists."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class NutritionistStats:
    """Plan and patient counters for one nutritionist."""

    total_plans: int
    active_plans: int
    expired_plans: int
    average_duration: float
    total_patients: int
    active_patients_count: int
    plans_expiring_within_7_days: int


@dataclass(frozen=True)
class ShoppingListEntry:
    """Total quantity of one food item needed for a plan."""

    food_item_id: UUID
    food_name: str
    quantity: float
