"""Supabase implementation for stored meal plans."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from hranoplan.adapters.supabase_recipe_repository import parse_recipe_row
from hranoplan.domain.plans import MealPlanRecord, MealPlanSlot
from hranoplan.domain.recipes import SlotType
from hranoplan.services.planner import PlanRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase-backed repository for meal plans and their recipes."""

    client: Client

    def save_plan(  # noqa: PLR0913
        self,
        user_id: str | None,
        days: int,
        servings_per_day: int,
        constraints: dict[str, object],
        slots: list[MealPlanSlot],
    ) -> MealPlanRecord:
        """Insert the plan header and one row per slot."""
        response = (
            self.client.table("meal_plans")
            .insert(
                {
                    "user_id": user_id,
                    "days": days,
                    "servings_per_day": servings_per_day,
                    "mode": constraints.get("mode"),
                    "prep_time": constraints.get("prep_time"),
                    "excluded_products": constraints.get("excluded_products") or [],
                    "selected_recipe_ids": constraints.get("selected_recipe_ids"),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan")
        row = response.data[0]
        plan_id = UUID(row["id"])
        if slots:
            slot_rows = [
                {
                    "meal_plan_id": str(plan_id),
                    "recipe_id": slot.recipe.id,
                    "day_of_week": slot.day_index,
                    "slot_type": slot.slot_type.value if slot.slot_type else None,
                    "position": position,
                }
                for position, slot in enumerate(slots)
            ]
            try:
                self.client.table("meal_plan_recipes").insert(slot_rows).execute()
            except Exception as exc:
                # The two inserts are not atomic; drop the header left without slots.
                _logger.exception("Failed to store plan slots: plan_id=%s", plan_id)
                self.client.table("meal_plans").delete().eq(
                    "id", str(plan_id)
                ).execute()
                raise RuntimeError("Failed to create meal plan") from exc
        return _parse_plan(row, slots)

    def get_plan(self, plan_id: UUID) -> MealPlanRecord | None:
        """Return a plan with its recipes in day then position order."""
        plan_response = (
            self.client.table("meal_plans")
            .select("*")
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not plan_response.data:
            return None
        slots_response = (
            self.client.table("meal_plan_recipes")
            .select("*, recipes(*)")
            .eq("meal_plan_id", str(plan_id))
            .order("day_of_week")
            .order("position")
            .execute()
        )
        slots = []
        for row in slots_response.data or []:
            recipe_row = row.get("recipes")
            if not isinstance(recipe_row, dict):
                _logger.warning(
                    "Skipping plan slot without recipe: plan_id=%s recipe_id=%s",
                    plan_id,
                    row.get("recipe_id"),
                )
                continue
            slot_type = row.get("slot_type")
            slots.append(
                MealPlanSlot(
                    recipe=parse_recipe_row(recipe_row),
                    slot_type=SlotType(slot_type) if slot_type else None,
                    day_index=int(row.get("day_of_week", 0)),
                )
            )
        return _parse_plan(plan_response.data[0], slots)

    def list_recent_plans(self, limit: int) -> list[dict[str, object]]:
        """Return recent plan headers."""
        response = (
            self.client.table("meal_plans")
            .select("id, user_id, days, servings_per_day, mode, created_at")
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return response.data or []


def _parse_plan(row: dict[str, object], slots: list[MealPlanSlot]) -> MealPlanRecord:
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else datetime.now(tz=UTC)
    )
    prep_time = row.get("prep_time")
    return MealPlanRecord(
        id=UUID(row["id"]),
        user_id=row.get("user_id"),
        days=int(row.get("days", 0)),
        servings_per_day=int(row.get("servings_per_day", 0)),
        mode=str(row.get("mode") or "category"),
        prep_time=int(prep_time) if prep_time is not None else None,
        excluded_products=list(row.get("excluded_products") or []),
        selected_recipe_ids=row.get("selected_recipe_ids"),
        created_at=created_at,
        slots=slots,
    )
