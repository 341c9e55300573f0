"""Pydantic models for meal plan API payloads."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from hranoplan.services.selection import (
    CategoryFilter,
    ExplicitAllowList,
    SelectionStrategy,
)

ANY_PREP_TIME = "any"


class MealPlanRequest(BaseModel):
    """Meal plan generation request."""

    model_config = ConfigDict(populate_by_name=True)

    days: int = Field(ge=1)
    servings_per_day: int = Field(alias="servingsPerDay", ge=1)
    mode: Literal["category", "allow_list"] = "category"
    prep_time: int | str = Field(default=ANY_PREP_TIME, alias="prepTime")
    excluded_products: list[str] = Field(
        default_factory=list, alias="excludedProducts"
    )
    include_snack: bool | None = Field(default=None, alias="includeSnack")
    selected_recipe_ids: list[str] | None = Field(
        default=None, alias="selectedRecipeIds"
    )
    user_id: str | None = Field(default=None, alias="userId")
    seed: int | None = None

    @field_validator("prep_time")
    @classmethod
    def _normalize_prep_time(cls, value: int | str) -> int | str:
        if isinstance(value, int):
            if value < 0:
                raise ValueError("prepTime must not be negative")
            return value
        cleaned = value.strip().lower()
        if cleaned == ANY_PREP_TIME:
            return ANY_PREP_TIME
        if cleaned.isdigit():
            return int(cleaned)
        raise ValueError("prepTime must be a number of minutes or 'any'")

    @model_validator(mode="after")
    def _check_mode_fields(self) -> "MealPlanRequest":
        if self.mode == "category" and self.selected_recipe_ids:
            raise ValueError("selectedRecipeIds requires mode 'allow_list'")
        if self.mode == "allow_list" and self.excluded_products:
            raise ValueError("excludedProducts requires mode 'category'")
        return self

    @property
    def max_prep_time(self) -> int | None:
        """Return the prep time ceiling, or None for any."""
        return None if self.prep_time == ANY_PREP_TIME else int(self.prep_time)

    def to_strategy(self, include_snack_default: bool = True) -> SelectionStrategy:
        """Build the selection strategy for the requested mode."""
        if self.mode == "allow_list":
            return ExplicitAllowList(recipe_ids=self.selected_recipe_ids)
        include_snack = (
            include_snack_default if self.include_snack is None else self.include_snack
        )
        return CategoryFilter(
            max_prep_time=self.max_prep_time,
            excluded_products=list(self.excluded_products),
            include_snack=include_snack,
        )
