"""Recipe selection strategies for meal plan generation."""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import ClassVar, Protocol

from hranoplan.domain.errors import EmptyPoolError, MissingSlotCandidatesError
from hranoplan.domain.plans import MealPlanSlot
from hranoplan.domain.recipes import REQUIRED_SLOTS, SLOT_ORDER, Recipe, SlotType

_logger = logging.getLogger(__name__)


class SelectionStrategy(Protocol):
    """Picks recipes for every slot of a plan from a recipe pool."""

    mode: ClassVar[str]

    def requested_recipe_ids(self) -> list[str] | None:
        """Return the ids the catalog pool must be restricted to, if any."""

    def select(
        self,
        pool: Sequence[Recipe],
        days: int,
        servings_per_day: int,
        rng: random.Random,
    ) -> list[MealPlanSlot]:
        """Return the ordered slots of a plan."""

    def describe(self) -> dict[str, object]:
        """Return the constraint parameters for persistence."""


@dataclass(frozen=True)
class CategoryFilter(SelectionStrategy):
    """Fill breakfast/lunch/dinner (and snack) slots from flagged recipes."""

    mode: ClassVar[str] = "category"

    max_prep_time: int | None = None
    excluded_products: list[str] = field(default_factory=list)
    include_snack: bool = True

    def requested_recipe_ids(self) -> list[str] | None:
        return None

    def select(
        self,
        pool: Sequence[Recipe],
        days: int,
        servings_per_day: int,
        rng: random.Random,
    ) -> list[MealPlanSlot]:
        filtered = apply_filters(pool, self.max_prep_time, self.excluded_products)
        return select_by_category(
            filtered,
            days,
            servings_per_day,
            rng,
            include_snack=self.include_snack,
        )

    def describe(self) -> dict[str, object]:
        return {
            "mode": self.mode,
            "prep_time": self.max_prep_time,
            "excluded_products": list(self.excluded_products),
            "selected_recipe_ids": None,
        }


@dataclass(frozen=True)
class ExplicitAllowList(SelectionStrategy):
    """Draw a flat sequence of meals from caller-selected recipes."""

    mode: ClassVar[str] = "allow_list"

    recipe_ids: list[str] | None = None

    def requested_recipe_ids(self) -> list[str] | None:
        return list(self.recipe_ids) if self.recipe_ids else None

    def select(
        self,
        pool: Sequence[Recipe],
        days: int,
        servings_per_day: int,
        rng: random.Random,
    ) -> list[MealPlanSlot]:
        allowed = pool
        if self.recipe_ids:
            wanted = set(self.recipe_ids)
            allowed = [recipe for recipe in pool if recipe.id in wanted]
        recipes = draw_without_replacement(allowed, days * servings_per_day, rng)
        return [
            MealPlanSlot(
                recipe=recipe,
                slot_type=display_slot(recipe),
                day_index=index // servings_per_day,
            )
            for index, recipe in enumerate(recipes)
        ]

    def describe(self) -> dict[str, object]:
        return {
            "mode": self.mode,
            "prep_time": None,
            "excluded_products": [],
            "selected_recipe_ids": self.requested_recipe_ids(),
        }


def filter_by_prep_time(
    recipes: Sequence[Recipe], max_prep_time: int | None
) -> list[Recipe]:
    """Keep recipes whose prep time fits the ceiling; ``None`` means any."""
    if max_prep_time is None:
        return list(recipes)
    return [
        recipe
        for recipe in recipes
        if recipe.prep_time is not None and recipe.prep_time <= max_prep_time
    ]


def exclude_products(
    recipes: Sequence[Recipe], excluded_products: Sequence[str]
) -> list[Recipe]:
    """Drop recipes with an ingredient name containing an excluded product.

    Matching is a case-insensitive substring test. Recipes without a readable
    ingredient list are dropped whenever an exclusion is active.
    """
    needles = [product.strip().lower() for product in excluded_products]
    needles = [needle for needle in needles if needle]
    if not needles:
        return list(recipes)
    return [recipe for recipe in recipes if not _contains_excluded(recipe, needles)]


def apply_filters(
    recipes: Sequence[Recipe],
    max_prep_time: int | None,
    excluded_products: Sequence[str],
) -> list[Recipe]:
    """Apply prep time and exclusion filters, falling back to the whole pool."""
    filtered = exclude_products(
        filter_by_prep_time(recipes, max_prep_time), excluded_products
    )
    if not filtered and recipes:
        _logger.warning(
            "No recipes match filters, using all recipes: "
            "prep_time=%s excluded=%s pool=%s",
            max_prep_time,
            list(excluded_products),
            len(recipes),
        )
        return list(recipes)
    return filtered


def slot_template(servings_per_day: int) -> list[SlotType]:
    """Cycle breakfast, lunch, dinner until the day has enough slots."""
    return [
        REQUIRED_SLOTS[index % len(REQUIRED_SLOTS)]
        for index in range(servings_per_day)
    ]


def select_by_category(
    pool: Sequence[Recipe],
    days: int,
    servings_per_day: int,
    rng: random.Random,
    *,
    include_snack: bool = True,
) -> list[MealPlanSlot]:
    """Assign a flagged recipe to every (day, slot) pair.

    A recipe used for a slot type on the previous day is avoided unless it is
    the only candidate. Required slots without candidates fail the whole plan;
    the snack slot is skipped instead.
    """
    if not pool:
        raise EmptyPoolError()
    template = slot_template(servings_per_day)
    candidates = {
        slot_type: [recipe for recipe in pool if recipe.fits_slot(slot_type)]
        for slot_type in SLOT_ORDER
    }
    for slot_type in template:
        if not candidates[slot_type]:
            raise MissingSlotCandidatesError(slot_type)
    if include_snack and not candidates[SlotType.SNACK]:
        _logger.info("No snack recipes available, skipping snack slots")

    slots: list[MealPlanSlot] = []
    previous_day: list[MealPlanSlot] = []
    for day_index in range(days):
        day_types = list(template)
        if include_snack and candidates[SlotType.SNACK]:
            day_types.append(SlotType.SNACK)
        day_slots = []
        for slot_type in day_types:
            recent_ids = {
                slot.recipe.id for slot in previous_day if slot.slot_type == slot_type
            }
            recipe = _pick(candidates[slot_type], recent_ids, rng)
            day_slots.append(
                MealPlanSlot(recipe=recipe, slot_type=slot_type, day_index=day_index)
            )
        day_slots.sort(key=lambda slot: SLOT_ORDER.index(slot.slot_type))
        slots.extend(day_slots)
        previous_day = day_slots
    return slots


def draw_without_replacement(
    pool: Sequence[Recipe], count: int, rng: random.Random
) -> list[Recipe]:
    """Draw ``count`` recipes, using every recipe once before any repeats."""
    if not pool:
        raise EmptyPoolError()
    selected: list[Recipe] = []
    remaining = list(pool)
    while len(selected) < count:
        if not remaining:
            remaining = list(pool)
        selected.append(remaining.pop(rng.randrange(len(remaining))))
    return selected


def display_slot(recipe: Recipe) -> SlotType | None:
    """Return the first slot type the recipe is flagged for."""
    for slot_type in SLOT_ORDER:
        if recipe.fits_slot(slot_type):
            return slot_type
    return None


def _pick(
    eligible: list[Recipe], recent_ids: set[str], rng: random.Random
) -> Recipe:
    fresh = [recipe for recipe in eligible if recipe.id not in recent_ids]
    return rng.choice(fresh or eligible)


def _contains_excluded(recipe: Recipe, needles: list[str]) -> bool:
    if recipe.ingredients is None:
        return True
    for ingredient in recipe.ingredients:
        name = ingredient.name.lower()
        if any(needle in name for needle in needles):
            return True
    return False
