"""Shopping list generation for the active plan."""

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from diet_planner.domain.plans import DietPlan
from diet_planner.domain.stats import ShoppingListEntry
from diet_planner.services.cache import SHOPPING_LISTS_REGION, Cache
from diet_planner.services.people import PeopleService
from diet_planner.services.plans import PlanRepository

_logger = logging.getLogger(__name__)


@dataclass
class ShoppingListGenerator:
    """Consolidates ingredient quantities across a plan's days."""

    plans: PlanRepository
    people: PeopleService
    cache: Cache
    cache_ttl_seconds: int = 300

    def generate(self, patient_id: UUID, as_of: date) -> list[ShoppingListEntry]:
        """Return summed quantities per food item, empty without an active plan."""
        self.people.get_patient(patient_id)
        cache_key = f"{patient_id}:{as_of.isoformat()}"
        version = self.cache.version(SHOPPING_LISTS_REGION)
        cached = self.cache.get(SHOPPING_LISTS_REGION, cache_key)
        if isinstance(cached, list):
            return cached

        plan = self.plans.find_active(patient_id, as_of)
        if plan is None:
            _logger.debug("No active plan for patient %s on %s", patient_id, as_of)
            entries = []
        else:
            entries = consolidate(plan)
        self.cache.set(
            SHOPPING_LISTS_REGION,
            cache_key,
            entries,
            ttl_seconds=self.cache_ttl_seconds,
            version=version,
        )
        return entries


def consolidate(plan: DietPlan) -> list[ShoppingListEntry]:
    """Group a plan's ingredients by food item in first-seen order."""
    names: dict[UUID, str] = {}
    quantities: dict[UUID, float] = {}
    for ingredient in plan.iter_ingredients():
        food_id = ingredient.food_item_id
        names.setdefault(food_id, ingredient.food_name)
        quantities[food_id] = quantities.get(food_id, 0.0) + ingredient.quantity
    return [
        ShoppingListEntry(
            food_item_id=food_id, food_name=names[food_id], quantity=total
        )
        for food_id, total in quantities.items()
    ]
