"""Diet plan API endpoints."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from fastapi import APIRouter, Request, status

from diet_planner.api.models import DietPlanPayload, DishPayload
from diet_planner.domain.dishes import PlanDish
from diet_planner.domain.plans import DietDay, DietPlanDraft, Meal
from diet_planner.services.dishes import compose

if TYPE_CHECKING:
    from diet_planner.containers import AppContainer
    from diet_planner.services.ingredients import IngredientCalculator

router = APIRouter(tags=["plans"])


@router.post("/plans", status_code=status.HTTP_201_CREATED)
async def create_plan(payload: DietPlanPayload, request: Request) -> dict[str, object]:
    """Validate and create a diet plan."""
    container: AppContainer = request.app.state.container
    draft = _build_draft(payload, container.ingredient_calculator)
    plan = container.plan_service.create(
        draft, payload.patient_id, payload.nutritionist_id
    )
    return {"plan": asdict(plan)}


@router.get("/plans/{plan_id}")
async def get_plan(plan_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"plan": asdict(container.plan_service.get(plan_id))}


@router.put("/plans/{plan_id}")
async def update_plan(
    plan_id: UUID, payload: DietPlanPayload, request: Request
) -> dict[str, object]:
    """Validate and replace a diet plan."""
    container: AppContainer = request.app.state.container
    draft = _build_draft(payload, container.ingredient_calculator)
    plan = container.plan_service.update(
        plan_id, draft, payload.patient_id, payload.nutritionist_id
    )
    return {"plan": asdict(plan)}


@router.delete("/plans/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(plan_id: UUID, request: Request) -> None:
    container: AppContainer = request.app.state.container
    container.plan_service.delete(plan_id)


@router.get("/patients/{patient_id}/plans")
async def patient_plans(patient_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    plans = container.plan_service.list_by_patient(patient_id)
    return {"plans": [asdict(plan) for plan in plans]}


@router.get("/patients/{patient_id}/plans/current")
async def current_plan(
    patient_id: UUID, request: Request, on: date | None = None
) -> dict[str, object]:
    """Return the plan active on the given date, or null."""
    container: AppContainer = request.app.state.container
    plan = container.plan_service.current_plan(patient_id, on or date.today())
    return {"plan": asdict(plan) if plan else None}


@router.get("/patients/{patient_id}/shopping-list")
async def shopping_list(
    patient_id: UUID, request: Request, as_of: date | None = None
) -> dict[str, object]:
    """Return consolidated ingredient quantities for the active plan."""
    container: AppContainer = request.app.state.container
    entries = container.shopping_list_generator.generate(
        patient_id, as_of or date.today()
    )
    return {"items": [asdict(entry) for entry in entries]}


@router.get("/patients/{patient_id}/dishes/{dish_id}/substitutes")
async def dish_substitutes(
    patient_id: UUID, dish_id: UUID, request: Request, on: date | None = None
) -> dict[str, object]:
    """Return dish templates that can replace a dish of the active plan."""
    container: AppContainer = request.app.state.container
    dishes = container.substitution_engine.find_substitutes_for_dish(
        dish_id, patient_id, on or date.today()
    )
    return {"dishes": [asdict(dish) for dish in dishes]}


@router.get("/nutritionists/{nutritionist_id}/plans")
async def nutritionist_plans(
    nutritionist_id: UUID, request: Request
) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    plans = container.plan_service.list_by_nutritionist(nutritionist_id)
    return {"plans": [asdict(plan) for plan in plans]}


@router.get("/nutritionists/{nutritionist_id}/statistics")
async def nutritionist_statistics(
    nutritionist_id: UUID, request: Request, today: date | None = None
) -> dict[str, object]:
    """Return plan and patient counters for a nutritionist."""
    container: AppContainer = request.app.state.container
    container.people_service.get_nutritionist(nutritionist_id)
    stats = container.statistics_aggregator.statistics(
        nutritionist_id, today or date.today()
    )
    return {"statistics": asdict(stats)}


@router.get("/filters/{filter_id}/foods")
async def filter_foods(filter_id: UUID, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    foods = container.catalog_service.foods_in_filter(filter_id)
    return {"foods": [asdict(food) for food in foods]}


def _build_draft(
    payload: DietPlanPayload, calculator: IngredientCalculator
) -> DietPlanDraft:
    """Convert a payload into a draft with server-computed dish totals."""
    days = tuple(
        DietDay(
            day=day.day,
            meals=tuple(
                Meal(
                    time=meal.time,
                    rating=meal.rating,
                    dishes=tuple(_build_dish(dish, calculator) for dish in meal.dishes),
                )
                for meal in day.meals
            ),
        )
        for day in payload.days
    )
    return DietPlanDraft(
        start_date=payload.start_date,
        end_date=payload.end_date,
        calorie_min=payload.calorie_min,
        calorie_max=payload.calorie_max,
        daily_calories=payload.daily_calories,
        carb_pct=payload.carb_pct,
        fat_pct=payload.fat_pct,
        protein_pct=payload.protein_pct,
        meals_per_day=payload.meals_per_day,
        visible=payload.visible,
        interchangeable=payload.interchangeable,
        days=days,
        filter_id=payload.filter_id,
    )


def _build_dish(payload: DishPayload, calculator: IngredientCalculator) -> PlanDish:
    ingredients = [
        calculator.build(item.food_item_id, item.quantity)
        for item in payload.ingredients
    ]
    return PlanDish(
        id=payload.id or uuid4(),
        content=compose(payload.name, ingredients, payload.recipe),
    )
