"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from hranoplan.api.serializers import serialize_recipe
from hranoplan.domain.errors import RecipeValidationError

if TYPE_CHECKING:
    from hranoplan.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/plans", dependencies=[Depends(require_admin)])
async def list_plans(request: Request, limit: int = 20) -> dict[str, object]:
    """Return recently generated meal plans."""
    container: AppContainer = request.app.state.container
    return {"plans": container.meal_plan_service.list_recent_plans(limit)}


@router.post(
    "/recipes",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def add_recipe(
    payload: dict[str, object], request: Request
) -> dict[str, object]:
    """Validate and store a single recipe."""
    container: AppContainer = request.app.state.container
    try:
        recipe = container.recipe_service.add_recipe(payload)
    except RecipeValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail={"errors": exc.errors},
        ) from exc
    return {"recipe": serialize_recipe(recipe)}


@router.post("/recipes/import", dependencies=[Depends(require_admin)])
async def import_recipes(
    payloads: list[dict[str, object]], request: Request
) -> dict[str, object]:
    """Add a batch of recipes, reporting per-recipe failures."""
    container: AppContainer = request.app.state.container
    result = container.recipe_service.import_recipes(payloads)
    return {"added": result.added, "failed": result.failed, "errors": result.errors}
