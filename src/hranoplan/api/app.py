"""FastAPI application factory."""

import logging
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import PlainTextResponse

from hranoplan.api.admin import router as admin_router
from hranoplan.api.models import MealPlanRequest
from hranoplan.api.serializers import (
    group_by_day,
    serialize_plan_header,
    serialize_shopping_item,
    serialize_slot,
    serialize_summary,
)
from hranoplan.app_logging import configure_logging
from hranoplan.containers import AppContainer
from hranoplan.domain.errors import CatalogUnavailableError, PlanGenerationError
from hranoplan.domain.plans import MealPlanRecord
from hranoplan.services.shopping import format_shopping_list


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Hranoplan")
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/recipes")
    async def list_recipes(request: Request) -> list[dict[str, object]]:
        """Return the recipe catalog for the recipe picker."""
        state_container: AppContainer = request.app.state.container
        try:
            summaries = state_container.recipe_service.list_summaries()
        except CatalogUnavailableError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
            ) from exc
        return [serialize_summary(summary) for summary in summaries]

    @app.post("/api/mealprep")
    async def create_meal_plan(
        payload: MealPlanRequest, request: Request
    ) -> dict[str, object]:
        """Generate, store and return a meal plan with its shopping list."""
        state_container: AppContainer = request.app.state.container
        service = state_container.meal_plan_service
        strategy = payload.to_strategy(
            state_container.settings.include_snack_default
        )
        try:
            plan = service.create_plan(
                strategy,
                payload.days,
                payload.servings_per_day,
                user_id=payload.user_id,
                seed=payload.seed,
            )
        except PlanGenerationError as exc:
            logger.warning("Meal plan generation failed: %s", exc)
            raise HTTPException(
                status_code=422, detail=str(exc)
            ) from exc
        except CatalogUnavailableError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
            ) from exc

        shopping_list = service.generate_shopping_list(plan.slots)
        return {
            "success": True,
            "message": "Meal plan generated successfully",
            "data": {
                "planId": str(plan.id),
                "mealPlan": [serialize_slot(slot) for slot in plan.slots],
                "shoppingList": [
                    serialize_shopping_item(item) for item in shopping_list
                ],
                "requestParams": payload.model_dump(by_alias=True),
            },
        }

    @app.get("/api/mealplan/{plan_id}")
    async def get_meal_plan(plan_id: UUID, request: Request) -> dict[str, object]:
        """Return a stored plan grouped by day with its shopping list."""
        state_container: AppContainer = request.app.state.container
        plan = _require_plan(state_container, plan_id)
        shopping_list = state_container.meal_plan_service.generate_shopping_list(
            plan.slots
        )
        return {
            "success": True,
            "data": {
                "plan": serialize_plan_header(plan),
                "days": group_by_day(plan),
                "mealPlan": [serialize_slot(slot) for slot in plan.slots],
                "shoppingList": [
                    serialize_shopping_item(item) for item in shopping_list
                ],
            },
        }

    @app.get(
        "/api/mealplan/{plan_id}/shopping-list.txt",
        response_class=PlainTextResponse,
    )
    async def get_shopping_list_text(plan_id: UUID, request: Request) -> str:
        """Return the shopping list as plain text lines for sharing."""
        state_container: AppContainer = request.app.state.container
        plan = _require_plan(state_container, plan_id)
        return format_shopping_list(
            state_container.meal_plan_service.generate_shopping_list(plan.slots)
        )

    return app


def _require_plan(state_container: AppContainer, plan_id: UUID) -> MealPlanRecord:
    """Return the stored plan or raise a 404."""
    plan = state_container.meal_plan_service.get_plan(plan_id)
    if plan is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Meal plan not found"
        )
    return plan
