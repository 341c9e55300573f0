"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from hranoplan.adapters.supabase_plan_repository import SupabasePlanRepository
from hranoplan.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from hranoplan.config import Settings, resolve_plan_seed
from hranoplan.services.planner import MealPlanService
from hranoplan.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    recipe_service: RecipeService
    meal_plan_service: MealPlanService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    recipe_repository = SupabaseRecipeRepository(supabase_client)
    plan_repository = SupabasePlanRepository(supabase_client)
    return AppContainer(
        settings=resolved_settings,
        recipe_service=RecipeService(recipe_repository),
        meal_plan_service=MealPlanService(
            recipe_repository=recipe_repository,
            plan_repository=plan_repository,
            seed=resolve_plan_seed(resolved_settings),
        ),
    )
