"""Diet plan domain models."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, time
from uuid import UUID

from diet_planner.domain.dishes import Ingredient, PlanDish


@dataclass(frozen=True)
class Meal:
    """A meal at a time of day made of plan dishes."""

    time: time
    rating: int = 0
    dishes: tuple[PlanDish, ...] = ()


@dataclass(frozen=True)
class DietDay:
    """Meals scheduled for one calendar date."""

    day: date
    meals: tuple[Meal, ...] = ()


@dataclass(frozen=True)
class DietPlanDraft:
    """Plan data submitted for create or update."""

    start_date: date
    end_date: date
    calorie_min: float = 0.0
    calorie_max: float = 0.0
    daily_calories: float = 0.0
    carb_pct: float = 0.0
    fat_pct: float = 0.0
    protein_pct: float = 0.0
    meals_per_day: int = 0
    visible: bool = True
    interchangeable: bool = False
    days: tuple[DietDay, ...] = ()
    filter_id: UUID | None = None


@dataclass(frozen=True)
class DietPlan:
    """Persisted diet plan owned by one patient and one nutritionist."""

    id: UUID
    patient_id: UUID
    nutritionist_id: UUID
    start_date: date
    end_date: date
    calorie_min: float = 0.0
    calorie_max: float = 0.0
    daily_calories: float = 0.0
    carb_pct: float = 0.0
    fat_pct: float = 0.0
    protein_pct: float = 0.0
    meals_per_day: int = 0
    visible: bool = True
    interchangeable: bool = False
    days: tuple[DietDay, ...] = field(default=())
    filter_id: UUID | None = None

    @classmethod
    def from_draft(
        cls,
        plan_id: UUID,
        draft: DietPlanDraft,
        patient_id: UUID,
        nutritionist_id: UUID,
    ) -> "DietPlan":
        """Attach identity and ownership to a draft."""
        return cls(
            id=plan_id,
            patient_id=patient_id,
            nutritionist_id=nutritionist_id,
            start_date=draft.start_date,
            end_date=draft.end_date,
            calorie_min=draft.calorie_min,
            calorie_max=draft.calorie_max,
            daily_calories=draft.daily_calories,
            carb_pct=draft.carb_pct,
            fat_pct=draft.fat_pct,
            protein_pct=draft.protein_pct,
            meals_per_day=draft.meals_per_day,
            visible=draft.visible,
            interchangeable=draft.interchangeable,
            days=draft.days,
            filter_id=draft.filter_id,
        )

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days

    def is_active_on(self, on: date) -> bool:
        """Return True when the inclusive date range contains ``on``."""
        return self.start_date <= on <= self.end_date

    def is_expired_on(self, on: date) -> bool:
        return self.end_date < on

    def overlaps(self, start: date, end: date) -> bool:
        return ranges_overlap(self.start_date, self.end_date, start, end)

    def iter_dishes(self) -> Iterator[PlanDish]:
        """Yield every dish of every meal in day order."""
        for diet_day in self.days:
            for meal in diet_day.meals:
                yield from meal.dishes

    def iter_ingredients(self) -> Iterator[Ingredient]:
        for dish in self.iter_dishes():
            yield from dish.content.ingredients


def ranges_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    """Return True when two inclusive date ranges intersect."""
    return start1 <= end2 and start2 <= end1
