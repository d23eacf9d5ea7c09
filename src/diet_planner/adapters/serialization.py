"""Row conversion helpers shared by the Supabase repositories."""

from datetime import date, time
from uuid import UUID

from diet_planner.domain.dishes import DishContent, Ingredient, NutrientTotals, PlanDish
from diet_planner.domain.plans import DietDay, Meal
from diet_planner.services.dishes import compose


def serialize_ingredient(ingredient: Ingredient) -> dict[str, object]:
    return {
        "food_item_id": str(ingredient.food_item_id),
        "food_name": ingredient.food_name,
        "quantity": ingredient.quantity,
        "protein": ingredient.totals.protein,
        "fat": ingredient.totals.fat,
        "kcal": ingredient.totals.kcal,
        "carbohydrate": ingredient.totals.carbohydrate,
    }


def parse_ingredient(row: dict[str, object]) -> Ingredient:
    return Ingredient(
        food_item_id=UUID(str(row["food_item_id"])),
        food_name=str(row.get("food_name", "")),
        quantity=float(row.get("quantity", 0.0)),
        totals=NutrientTotals(
            protein=float(row.get("protein", 0.0)),
            fat=float(row.get("fat", 0.0)),
            kcal=float(row.get("kcal", 0.0)),
            carbohydrate=float(row.get("carbohydrate", 0.0)),
        ),
    )


def parse_dish_content(row: dict[str, object]) -> DishContent:
    """Parse dish content, recomputing totals from the stored ingredients."""
    ingredients = row.get("ingredients") or []
    return compose(
        name=str(row.get("name", "")),
        ingredients=[parse_ingredient(item) for item in ingredients],
        recipe=str(row.get("recipe") or ""),
    )


def serialize_days(days: tuple[DietDay, ...]) -> list[dict[str, object]]:
    """Serialize the day → meal → dish tree into JSON-compatible rows."""
    return [
        {
            "day": diet_day.day.isoformat(),
            "meals": [
                {
                    "time": meal.time.isoformat(),
                    "rating": meal.rating,
                    "dishes": [
                        {
                            "id": str(dish.id),
                            "name": dish.content.name,
                            "recipe": dish.content.recipe,
                            "ingredients": [
                                serialize_ingredient(ingredient)
                                for ingredient in dish.content.ingredients
                            ],
                        }
                        for dish in meal.dishes
                    ],
                }
                for meal in diet_day.meals
            ],
        }
        for diet_day in days
    ]


def parse_days(rows: list[dict[str, object]] | None) -> tuple[DietDay, ...]:
    return tuple(
        DietDay(
            day=date.fromisoformat(str(row["day"])),
            meals=tuple(_parse_meal(meal) for meal in row.get("meals") or []),
        )
        for row in rows or []
    )


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        time=time.fromisoformat(str(row["time"])),
        rating=int(row.get("rating", 0)),
        dishes=tuple(
            PlanDish(id=UUID(str(dish["id"])), content=parse_dish_content(dish))
            for dish in row.get("dishes") or []
        ),
    )
