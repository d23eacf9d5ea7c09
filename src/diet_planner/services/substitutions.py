"""Dish substitution recommendations."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from diet_planner.domain.dishes import Dish, PlanDish, PredeterminedDish
from diet_planner.domain.errors import NotFoundError
from diet_planner.services.catalog import FoodCatalogService
from diet_planner.services.filters import reintroduces_filtered_food
from diet_planner.services.people import PeopleService
from diet_planner.services.plans import PlanRepository

CALORIE_TOLERANCE_PCT = 10

_logger = logging.getLogger(__name__)


@dataclass
class SubstitutionEngine:
    """Proposes nutritionist dish templates that can replace a plan dish."""

    people: PeopleService
    plans: PlanRepository
    catalog: FoodCatalogService

    def find_substitutes(
        self, target_dish: Dish, patient_id: UUID, today: date | None = None
    ) -> list[PredeterminedDish]:
        """Return filter-compliant templates within the calorie band.

        Missing optional data (no nutritionist, no active plan, no templates)
        yields an empty list.
        """
        patient = self.people.get_patient(patient_id)
        if patient.nutritionist_id is None:
            _logger.info("Patient %s has no nutritionist, no substitutes", patient_id)
            return []
        candidates = self.catalog.predetermined_dishes(patient.nutritionist_id)
        if not candidates:
            return []

        plan = self.plans.find_active(patient_id, today or date.today())
        if plan is None:
            _logger.info("Patient %s has no active plan, no substitutes", patient_id)
            return []
        dietary_filter = self.catalog.find_filter(plan.filter_id)

        return [
            candidate
            for candidate in candidates
            if not reintroduces_filtered_food(candidate, dietary_filter)
            and within_calorie_band(target_dish, candidate)
        ]

    def find_substitutes_for_dish(
        self, dish_id: UUID, patient_id: UUID, today: date | None = None
    ) -> list[PredeterminedDish]:
        """Locate a dish in the patient's active plan and find its substitutes."""
        self.people.get_patient(patient_id)
        plan = self.plans.find_active(patient_id, today or date.today())
        if plan is None:
            return []
        target = _find_plan_dish(plan.iter_dishes(), dish_id)
        if target is None:
            raise NotFoundError(f"Dish {dish_id} not found in plan {plan.id}")
        return self.find_substitutes(target, patient_id, today)


def within_calorie_band(target: Dish, candidate: Dish) -> bool:
    """Return True when ``target.kcal * 0.9 < candidate.kcal < target.kcal * 1.1``."""
    kcal = target.content.totals.kcal
    lower = kcal * (100 - CALORIE_TOLERANCE_PCT) / 100
    upper = kcal * (100 + CALORIE_TOLERANCE_PCT) / 100
    return lower < candidate.content.totals.kcal < upper


def _find_plan_dish(dishes: Iterable[PlanDish], dish_id: UUID) -> PlanDish | None:
    for dish in dishes:
        if dish.id == dish_id:
            return dish
    return None
