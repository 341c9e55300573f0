"""Domain errors raised by meal plan generation and the recipe catalog."""

from hranoplan.domain.recipes import SlotType


class HranoplanError(Exception):
    """Base class for application errors."""


class PlanGenerationError(HranoplanError):
    """Meal plan generation failed; no partial plan is produced."""


class EmptyPoolError(PlanGenerationError):
    """No recipes are available to build a plan from."""

    def __init__(self, message: str = "No recipes available to build a meal plan"):
        super().__init__(message)


class MissingSlotCandidatesError(PlanGenerationError):
    """A required meal slot has no eligible recipes."""

    def __init__(self, slot_type: SlotType) -> None:
        self.slot_type = slot_type
        super().__init__(
            f"No eligible recipes for {slot_type.value}; "
            "relax the prep time or exclusion filters"
        )


class InvalidConstraintsError(PlanGenerationError):
    """Plan constraints are out of range."""


class CatalogUnavailableError(HranoplanError):
    """The recipe catalog could not be read."""


class RecipeValidationError(HranoplanError):
    """A recipe payload failed validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__("; ".join(errors))
