"""Dish total aggregation."""

from collections.abc import Iterable

from diet_planner.domain.dishes import (
    ZERO_TOTALS,
    DishContent,
    Ingredient,
    NutrientTotals,
)


def aggregate(ingredients: Iterable[Ingredient]) -> NutrientTotals:
    """Sum ingredient totals. An empty list yields zeros."""
    total = ZERO_TOTALS
    for ingredient in ingredients:
        total = total + ingredient.totals
    return total


def compose(
    name: str, ingredients: Iterable[Ingredient], recipe: str = ""
) -> DishContent:
    """Build dish content with totals derived from its ingredients."""
    items = tuple(ingredients)
    return DishContent(
        name=name,
        ingredients=items,
        recipe=recipe,
        totals=aggregate(items),
    )


def add_ingredient(content: DishContent, ingredient: Ingredient) -> DishContent:
    return compose(content.name, (*content.ingredients, ingredient), content.recipe)


def remove_ingredient(content: DishContent, index: int) -> DishContent:
    items = list(content.ingredients)
    del items[index]
    return compose(content.name, items, content.recipe)


def replace_ingredient(
    content: DishContent, index: int, ingredient: Ingredient
) -> DishContent:
    """Swap one ingredient and recompute totals."""
    items = list(content.ingredients)
    items[index] = ingredient
    return compose(content.name, items, content.recipe)
