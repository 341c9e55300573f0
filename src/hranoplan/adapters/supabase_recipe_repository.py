"""Supabase implementation for the recipe catalog."""

import logging
from dataclasses import dataclass

from supabase import Client

from hranoplan.domain.errors import CatalogUnavailableError
from hranoplan.domain.recipes import Ingredient, Recipe, RecipeSummary
from hranoplan.services.recipes import RecipeRepository

_logger = logging.getLogger(__name__)

_SUMMARY_COLUMNS = "id, name, is_breakfast, is_lunch, is_dinner, is_snack"
_RECIPE_COLUMNS = (
    "name",
    "description",
    "ingredients",
    "instructions",
    "prep_time",
    "cook_time",
    "servings",
    "image_url",
    "tags",
    "is_breakfast",
    "is_lunch",
    "is_dinner",
    "is_snack",
)


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed recipe catalog."""

    client: Client

    def list_recipes(self, recipe_ids: list[str] | None = None) -> list[Recipe]:
        """Return all recipes, or only those with the given ids."""
        query = self.client.table("recipes").select("*")
        if recipe_ids:
            query = query.in_("id", recipe_ids)
        try:
            response = query.execute()
        except Exception as exc:
            _logger.exception("Failed to fetch recipes")
            raise CatalogUnavailableError("Recipe catalog is unavailable") from exc
        return [parse_recipe_row(row) for row in response.data or []]

    def list_summaries(self) -> list[RecipeSummary]:
        """Return id, name and slot flags for every recipe."""
        try:
            response = self.client.table("recipes").select(_SUMMARY_COLUMNS).execute()
        except Exception as exc:
            _logger.exception("Failed to fetch recipe summaries")
            raise CatalogUnavailableError("Recipe catalog is unavailable") from exc
        return [
            RecipeSummary(
                id=str(row["id"]),
                name=str(row.get("name", "")),
                is_breakfast=bool(row.get("is_breakfast")),
                is_lunch=bool(row.get("is_lunch")),
                is_dinner=bool(row.get("is_dinner")),
                is_snack=bool(row.get("is_snack")),
            )
            for row in response.data or []
        ]

    def create_recipe(self, payload: dict[str, object]) -> Recipe:
        """Insert a recipe and return the stored row."""
        row = {column: payload[column] for column in _RECIPE_COLUMNS if column in payload}
        try:
            response = self.client.table("recipes").insert(row).execute()
        except Exception as exc:
            _logger.exception("Failed to insert recipe: name=%s", row.get("name"))
            raise RuntimeError("Failed to create recipe") from exc
        if not response.data:
            raise RuntimeError("Failed to create recipe")
        return parse_recipe_row(response.data[0])


def parse_recipe_row(row: dict[str, object]) -> Recipe:
    """Parse a recipe row into a domain model."""
    recipe_id = str(row["id"])
    instructions = row.get("instructions")
    return Recipe(
        id=recipe_id,
        name=str(row.get("name", "")),
        description=row.get("description"),
        instructions=(
            [str(step) for step in instructions]
            if isinstance(instructions, list)
            else []
        ),
        ingredients=_parse_ingredients(recipe_id, row.get("ingredients")),
        prep_time=_optional_int(row.get("prep_time")),
        cook_time=_optional_int(row.get("cook_time")),
        servings=_optional_int(row.get("servings")),
        tags=[str(tag) for tag in row.get("tags") or []],
        is_breakfast=bool(row.get("is_breakfast")),
        is_lunch=bool(row.get("is_lunch")),
        is_dinner=bool(row.get("is_dinner")),
        is_snack=bool(row.get("is_snack")),
    )


def _parse_ingredients(recipe_id: str, raw: object) -> list[Ingredient] | None:
    if not isinstance(raw, list):
        return None
    ingredients = []
    for entry in raw:
        if not isinstance(entry, dict):
            _logger.warning("Dropping malformed ingredient: recipe_id=%s", recipe_id)
            continue
        name = entry.get("name")
        # Older catalog rows store the amount under "quantity".
        amount = entry.get("amount", entry.get("quantity"))
        if (
            not name
            or isinstance(amount, bool)
            or not isinstance(amount, int | float)
        ):
            _logger.warning(
                "Dropping malformed ingredient: recipe_id=%s ingredient=%s",
                recipe_id,
                entry,
            )
            continue
        ingredients.append(
            Ingredient(name=str(name), amount=amount, unit=str(entry.get("unit") or ""))
        )
    return ingredients


def _optional_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
