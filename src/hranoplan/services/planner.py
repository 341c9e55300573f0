"""Meal plan generation service."""

import logging
import random
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from hranoplan.domain.errors import EmptyPoolError, InvalidConstraintsError
from hranoplan.domain.plans import MealPlanRecord, MealPlanSlot, ShoppingListItem
from hranoplan.domain.recipes import Recipe
from hranoplan.services.recipes import RecipeRepository
from hranoplan.services.selection import SelectionStrategy
from hranoplan.services.shopping import aggregate_shopping_list

_logger = logging.getLogger(__name__)


class PlanRepository(Protocol):
    """Persistence interface for generated meal plans."""

    def save_plan(  # noqa: PLR0913
        self,
        user_id: str | None,
        days: int,
        servings_per_day: int,
        constraints: dict[str, object],
        slots: list[MealPlanSlot],
    ) -> MealPlanRecord:
        """Store a plan with its slots and return it."""

    def get_plan(self, plan_id: UUID) -> MealPlanRecord | None:
        """Return a stored plan by id, if present."""

    def list_recent_plans(self, limit: int) -> list[dict[str, object]]:
        """Return recent plan headers."""


@dataclass
class MealPlanService:
    """Builds meal plans from the recipe catalog and stores them."""

    recipe_repository: RecipeRepository
    plan_repository: PlanRepository
    seed: int | None = None

    def generate_meal_plan(
        self,
        strategy: SelectionStrategy,
        days: int,
        servings_per_day: int,
        rng: random.Random | None = None,
    ) -> list[MealPlanSlot]:
        """Select recipes for every slot of a plan without persisting it."""
        if days < 1:
            raise InvalidConstraintsError("days must be at least 1")
        if servings_per_day < 1:
            raise InvalidConstraintsError("servings per day must be at least 1")
        _logger.info(
            "Generating meal plan: mode=%s days=%s servings_per_day=%s",
            strategy.mode,
            days,
            servings_per_day,
        )
        pool = self._load_pool(strategy)
        if not pool:
            raise EmptyPoolError()
        slots = strategy.select(pool, days, servings_per_day, rng or self._new_rng())
        _logger.info("Generated meal plan: pool=%s slots=%s", len(pool), len(slots))
        return slots

    def generate_shopping_list(
        self, plan: Iterable[MealPlanSlot] | Iterable[Recipe]
    ) -> list[ShoppingListItem]:
        """Aggregate the ingredients of plan slots or recipes."""
        recipes = [
            entry.recipe if isinstance(entry, MealPlanSlot) else entry for entry in plan
        ]
        return aggregate_shopping_list(recipes)

    def create_plan(  # noqa: PLR0913
        self,
        strategy: SelectionStrategy,
        days: int,
        servings_per_day: int,
        user_id: str | None = None,
        seed: int | None = None,
    ) -> MealPlanRecord:
        """Generate a plan and persist it."""
        rng = random.Random(seed) if seed is not None else None
        slots = self.generate_meal_plan(strategy, days, servings_per_day, rng)
        return self.plan_repository.save_plan(
            user_id=user_id,
            days=days,
            servings_per_day=servings_per_day,
            constraints=strategy.describe(),
            slots=slots,
        )

    def get_plan(self, plan_id: UUID) -> MealPlanRecord | None:
        """Return a stored plan."""
        return self.plan_repository.get_plan(plan_id)

    def list_recent_plans(self, limit: int = 20) -> list[dict[str, object]]:
        """Return recent plan headers for admin views."""
        return self.plan_repository.list_recent_plans(limit)

    def _load_pool(self, strategy: SelectionStrategy) -> list[Recipe]:
        recipe_ids = strategy.requested_recipe_ids()
        pool = self.recipe_repository.list_recipes(recipe_ids)
        if recipe_ids:
            missing = set(recipe_ids) - {recipe.id for recipe in pool}
            if missing:
                _logger.warning("Selected recipes not found: %s", sorted(missing))
        return pool

    def _new_rng(self) -> random.Random:
        return random.Random(self.seed)
