"""Recipe suggestion endpoints."""

import logging

import httpx
import openai
from fastapi import APIRouter, Depends, Query, status

from virtual_fridge.api.deps import get_container, get_current_user
from virtual_fridge.api.errors import ApiError
from virtual_fridge.api.schemas import (
    AiRecipeRequest,
    generated_recipe_json,
    recipe_json,
)
from virtual_fridge.containers import AppContainer
from virtual_fridge.errors import ExternalServiceError, NotFoundError

_logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/recipes",
    tags=["recipes"],
    dependencies=[Depends(get_current_user)],
)


@router.get("")
async def find_recipe(
    ingredients: str | None = Query(default=None),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return a catalogue recipe using the comma-separated ingredients."""
    wanted = [part.strip() for part in (ingredients or "").split(",") if part.strip()]
    try:
        recipe = await container.recipe_service.find_recipe(wanted or None)
    except NotFoundError as exc:
        raise ApiError(status.HTTP_404_NOT_FOUND, "No recipes found") from exc
    except httpx.HTTPError as exc:
        _logger.exception("Recipe catalogue request failed")
        raise ApiError(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "Failed to fetch recipes from TheMealDB service.",
        ) from exc
    return {
        "message": "Recipes fetched successfully",
        "data": {"recipe": recipe_json(recipe)},
    }


@router.post("/ai")
async def generate_recipe(
    body: AiRecipeRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Generate a markdown recipe for the given ingredients."""
    try:
        generated = await container.ai_recipe_service.generate(body.ingredients)
    except openai.APIConnectionError as exc:
        _logger.exception("Could not reach the recipe model")
        raise ApiError(
            status.HTTP_502_BAD_GATEWAY, "Failed to connect to OpenAI servers"
        ) from exc
    except (ExternalServiceError, openai.OpenAIError) as exc:
        _logger.exception("Recipe generation failed")
        raise ApiError(
            status.HTTP_502_BAD_GATEWAY, "Failed to generate recipe with OpenAI."
        ) from exc
    return {
        "message": "AI recipe generated successfully",
        "data": {"recipe": generated_recipe_json(generated)},
    }
