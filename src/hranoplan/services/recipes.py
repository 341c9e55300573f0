"""Recipe catalog services."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from hranoplan.domain.errors import RecipeValidationError
from hranoplan.domain.recipes import Recipe, RecipeSummary

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for the recipe catalog."""

    def list_recipes(self, recipe_ids: list[str] | None = None) -> list[Recipe]:
        """Return all recipes, or only those with the given ids."""

    def list_summaries(self) -> list[RecipeSummary]:
        """Return id, name and slot flags for every recipe."""

    def create_recipe(self, payload: dict[str, object]) -> Recipe:
        """Create a recipe and return it."""


@dataclass
class ImportResult:
    """Outcome of a bulk recipe import."""

    added: int = 0
    failed: int = 0
    errors: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class RecipeService:
    """Application service for catalog reads and recipe intake."""

    repository: RecipeRepository

    def list_summaries(self) -> list[RecipeSummary]:
        """Return the catalog listing used by the recipe picker."""
        return self.repository.list_summaries()

    def add_recipe(self, payload: dict[str, object]) -> Recipe:
        """Validate and store a recipe."""
        errors = validate_recipe(payload)
        if errors:
            raise RecipeValidationError(errors)
        recipe = self.repository.create_recipe(payload)
        _logger.info("Added recipe: id=%s name=%s", recipe.id, recipe.name)
        return recipe

    def import_recipes(self, payloads: list[dict[str, object]]) -> ImportResult:
        """Add recipes one by one, counting failures instead of stopping."""
        result = ImportResult()
        for index, payload in enumerate(payloads, start=1):
            label = str(payload.get("name") or f"#{index}")
            try:
                self.add_recipe(payload)
            except RecipeValidationError as exc:
                result.failed += 1
                result.errors[label] = exc.errors
                _logger.warning("Recipe rejected: %s: %s", label, exc)
            except RuntimeError as exc:
                result.failed += 1
                result.errors[label] = [str(exc)]
                _logger.warning("Recipe insert failed: %s: %s", label, exc)
            else:
                result.added += 1
        return result


def validate_recipe(payload: dict[str, object]) -> list[str]:
    """Return human-readable problems with a recipe payload."""
    errors: list[str] = []
    if not payload.get("name"):
        errors.append("Recipe name is required")
    ingredients = payload.get("ingredients")
    if not isinstance(ingredients, list) or not ingredients:
        errors.append("Recipe must have at least one ingredient")
        ingredients = []
    instructions = payload.get("instructions")
    if not isinstance(instructions, list) or not instructions:
        errors.append("Recipe must have at least one instruction")

    for index, ingredient in enumerate(ingredients, start=1):
        if not isinstance(ingredient, dict):
            errors.append(f"Ingredient {index} must be an object")
            continue
        if not ingredient.get("name"):
            errors.append(f"Ingredient {index} is missing a name")
        amount = ingredient.get("amount")
        if isinstance(amount, bool) or not isinstance(amount, int | float):
            errors.append(f"Ingredient {index} must have a numeric amount")
        if not ingredient.get("unit"):
            errors.append(f"Ingredient {index} is missing a unit")
    return errors
