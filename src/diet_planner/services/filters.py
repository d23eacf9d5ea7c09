"""Dietary filter screening."""

from diet_planner.domain.catalog import DietaryFilter
from diet_planner.domain.dishes import Dish


def reintroduces_filtered_food(
    dish: Dish, dietary_filter: DietaryFilter | None
) -> bool:
    """Return True when the dish uses any food item listed in the filter.

    The filter acts as a hard exclusion set here.
    """
    if dietary_filter is None or not dietary_filter.food_item_ids:
        return False
    return not dietary_filter.food_item_ids.isdisjoint(dish.content.food_item_ids())


def screen(dishes: list[Dish], dietary_filter: DietaryFilter | None) -> list[Dish]:
    """Keep the dishes that do not use any filtered food item."""
    return [
        dish for dish in dishes if not reintroduces_filtered_food(dish, dietary_filter)
    ]
