"""JSON serialization of domain models for API responses."""

from hranoplan.domain.plans import MealPlanRecord, MealPlanSlot, ShoppingListItem
from hranoplan.domain.recipes import Recipe, RecipeSummary


def serialize_recipe(recipe: Recipe) -> dict[str, object]:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "description": recipe.description,
        "ingredients": (
            [
                {"name": item.name, "amount": item.amount, "unit": item.unit}
                for item in recipe.ingredients
            ]
            if recipe.ingredients is not None
            else None
        ),
        "instructions": list(recipe.instructions),
        "prepTime": recipe.prep_time,
        "cookTime": recipe.cook_time,
        "servings": recipe.servings,
        "tags": list(recipe.tags),
        "isBreakfast": recipe.is_breakfast,
        "isLunch": recipe.is_lunch,
        "isDinner": recipe.is_dinner,
        "isSnack": recipe.is_snack,
    }


def serialize_summary(summary: RecipeSummary) -> dict[str, object]:
    return {
        "id": summary.id,
        "name": summary.name,
        "is_breakfast": summary.is_breakfast,
        "is_lunch": summary.is_lunch,
        "is_dinner": summary.is_dinner,
        "is_snack": summary.is_snack,
    }


def serialize_slot(slot: MealPlanSlot) -> dict[str, object]:
    return {
        "dayIndex": slot.day_index,
        "slotType": slot.slot_type.value if slot.slot_type else None,
        "recipe": serialize_recipe(slot.recipe),
    }


def serialize_shopping_item(item: ShoppingListItem) -> dict[str, object]:
    return {
        "name": item.name,
        "amount": item.amount,
        "unit": item.unit,
        "recipes": list(item.recipes),
    }


def serialize_plan_header(plan: MealPlanRecord) -> dict[str, object]:
    return {
        "id": str(plan.id),
        "userId": plan.user_id,
        "days": plan.days,
        "servingsPerDay": plan.servings_per_day,
        "mode": plan.mode,
        "prepTime": plan.prep_time if plan.prep_time is not None else "any",
        "excludedProducts": list(plan.excluded_products),
        "selectedRecipeIds": plan.selected_recipe_ids,
        "createdAt": plan.created_at.isoformat(),
    }


def group_by_day(plan: MealPlanRecord) -> list[dict[str, object]]:
    """Group slots into one entry per day, including days left empty."""
    days: list[list[dict[str, object]]] = [[] for _ in range(plan.days)]
    for slot in plan.slots:
        if 0 <= slot.day_index < plan.days:
            days[slot.day_index].append(serialize_slot(slot))
    return [
        {"dayIndex": index, "meals": meals} for index, meals in enumerate(days)
    ]
