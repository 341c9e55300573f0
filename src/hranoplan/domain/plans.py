"""Domain models for generated meal plans."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from hranoplan.domain.recipes import Recipe, SlotType


@dataclass(frozen=True)
class MealPlanSlot:
    """Assignment of a recipe to a day and meal category."""

    recipe: Recipe
    slot_type: SlotType | None
    day_index: int


@dataclass
class ShoppingListItem:
    """Aggregated ingredient line with the recipes that contributed to it."""

    name: str
    amount: float
    unit: str
    recipes: list[str]


@dataclass(frozen=True)
class MealPlanRecord:
    """A persisted meal plan with its ordered slots."""

    id: UUID
    user_id: str | None
    days: int
    servings_per_day: int
    mode: str
    prep_time: int | None
    excluded_products: list[str]
    selected_recipe_ids: list[str] | None
    created_at: datetime
    slots: list[MealPlanSlot]
