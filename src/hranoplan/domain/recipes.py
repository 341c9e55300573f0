"""Domain models for the recipe catalog."""

from dataclasses import dataclass, field
from enum import Enum


class SlotType(str, Enum):
    """Meal category a recipe can fill."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


SLOT_ORDER = (SlotType.BREAKFAST, SlotType.LUNCH, SlotType.DINNER, SlotType.SNACK)
REQUIRED_SLOTS = (SlotType.BREAKFAST, SlotType.LUNCH, SlotType.DINNER)


@dataclass(frozen=True)
class Ingredient:
    """A single ingredient line of a recipe."""

    name: str
    amount: float
    unit: str


@dataclass(frozen=True)
class Recipe:
    """Represents a recipe read from the catalog.

    ``ingredients`` is ``None`` when the stored ingredient field was not a list.
    """

    id: str
    name: str
    instructions: list[str]
    ingredients: list[Ingredient] | None
    prep_time: int | None
    cook_time: int | None
    servings: int | None
    is_breakfast: bool = False
    is_lunch: bool = False
    is_dinner: bool = False
    is_snack: bool = False
    description: str | None = None
    tags: list[str] = field(default_factory=list)

    def fits_slot(self, slot_type: SlotType) -> bool:
        """Return true when the recipe is flagged for the slot type."""
        return {
            SlotType.BREAKFAST: self.is_breakfast,
            SlotType.LUNCH: self.is_lunch,
            SlotType.DINNER: self.is_dinner,
            SlotType.SNACK: self.is_snack,
        }[slot_type]


@dataclass(frozen=True)
class RecipeSummary:
    """Lightweight catalog entry used by the recipe picker."""

    id: str
    name: str
    is_breakfast: bool
    is_lunch: bool
    is_dinner: bool
    is_snack: bool
