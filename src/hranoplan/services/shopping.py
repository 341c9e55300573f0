"""Shopping list aggregation for generated meal plans."""

import logging
from collections.abc import Iterable

from hranoplan.domain.plans import ShoppingListItem
from hranoplan.domain.recipes import Recipe

_logger = logging.getLogger(__name__)


def aggregate_shopping_list(recipes: Iterable[Recipe]) -> list[ShoppingListItem]:
    """Merge recipe ingredients into shopping list lines.

    Lines are keyed by the raw ``(name, unit)`` pair and kept in order of first
    appearance. Every contribution appends the recipe name, so a recipe used
    twice is listed twice. Recipes without an ingredient list are skipped.
    """
    items: dict[tuple[str, str], ShoppingListItem] = {}
    for recipe in recipes:
        if not isinstance(recipe.ingredients, list):
            _logger.warning(
                "Skipping recipe with malformed ingredients: id=%s name=%s",
                recipe.id,
                recipe.name,
            )
            continue
        for ingredient in recipe.ingredients:
            key = (ingredient.name, ingredient.unit)
            existing = items.get(key)
            if existing is None:
                items[key] = ShoppingListItem(
                    name=ingredient.name,
                    amount=ingredient.amount,
                    unit=ingredient.unit,
                    recipes=[recipe.name],
                )
                continue
            existing.amount += ingredient.amount
            existing.recipes.append(recipe.name)
    return list(items.values())


def format_shopping_list(items: Iterable[ShoppingListItem]) -> str:
    """Render items as ``name - amount unit`` lines for copying or sharing."""
    return "\n".join(
        f"{item.name} - {_format_amount(item.amount)} {item.unit}" for item in items
    )


def _format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return str(int(amount))
    return str(amount)
