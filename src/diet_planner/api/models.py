"""Pydantic request models for the plan API."""

import datetime as dt
from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field


class IngredientPayload(BaseModel):
    """Food reference and quantity; totals are computed server-side."""

    food_item_id: UUID
    quantity: float = Field(ge=0.0)


class DishPayload(BaseModel):
    id: UUID | None = None
    name: str
    recipe: str = ""
    ingredients: list[IngredientPayload] = Field(default_factory=list)


class MealPayload(BaseModel):
    time: dt.time
    rating: int = 0
    dishes: list[DishPayload] = Field(default_factory=list)


class DietDayPayload(BaseModel):
    day: date
    meals: list[MealPayload] = Field(default_factory=list)


class DietPlanPayload(BaseModel):
    """Create/update body for a diet plan."""

    patient_id: UUID
    nutritionist_id: UUID
    start_date: date
    end_date: date
    calorie_min: float = Field(default=0.0, ge=0.0)
    calorie_max: float = Field(default=0.0, ge=0.0)
    daily_calories: float = Field(default=0.0, ge=0.0)
    carb_pct: float = Field(default=0.0, ge=0.0)
    fat_pct: float = Field(default=0.0, ge=0.0)
    protein_pct: float = Field(default=0.0, ge=0.0)
    meals_per_day: int = Field(default=0, ge=0)
    visible: bool = True
    interchangeable: bool = False
    filter_id: UUID | None = None
    days: list[DietDayPayload] = Field(default_factory=list)
