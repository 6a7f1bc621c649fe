"""Recipe suggestions from the recipe catalogue and the language model."""

import logging
from dataclasses import dataclass
from typing import Protocol

from virtual_fridge.domain.recipes import (
    DEFAULT_RECIPE_INGREDIENTS,
    GeneratedRecipe,
    Recipe,
    RecipeIngredient,
)
from virtual_fridge.errors import ExternalServiceError, NotFoundError

_MAX_MEAL_INGREDIENTS = 20

_logger = logging.getLogger(__name__)


class MealDbClient(Protocol):
    """Interface for recipe catalogue lookups."""

    async def filter_by_ingredients(self, ingredients: list[str]) -> list[dict]:
        """Return meal summaries containing the given ingredients."""

    async def lookup_meal(self, meal_id: str) -> dict | None:
        """Return the full meal record, if present."""


class TextGenerationClient(Protocol):
    """Interface for free-text LLM generation."""

    async def generate(
        self, *, model: str, reasoning_effort: str | None, store: bool, prompt: str
    ) -> tuple[str, str | None]:
        """Return generated text and the model that produced it."""


@dataclass
class RecipeService:
    """Finds a catalogue recipe for a set of ingredients."""

    client: MealDbClient

    async def find_recipe(self, ingredients: list[str] | None = None) -> Recipe:
        """Return the first matching recipe or raise NotFoundError."""
        wanted = ingredients or DEFAULT_RECIPE_INGREDIENTS
        meals = await self.client.filter_by_ingredients(wanted)
        if not meals:
            raise NotFoundError("No recipes found")
        meal = await self.client.lookup_meal(str(meals[0]["idMeal"]))
        if not meal:
            raise NotFoundError("No recipes found")
        return recipe_from_meal(meal)


def recipe_from_meal(meal: dict) -> Recipe:
    """Map a catalogue meal record to a Recipe."""
    ingredients = []
    for index in range(1, _MAX_MEAL_INGREDIENTS + 1):
        name = (meal.get(f"strIngredient{index}") or "").strip()
        if not name:
            continue
        measure = (meal.get(f"strMeasure{index}") or "").strip()
        ingredients.append(RecipeIngredient(name=name, measure=measure))
    return Recipe(
        name=meal.get("strMeal") or "",
        instructions=meal.get("strInstructions") or "",
        ingredients=ingredients,
        thumbnail=meal.get("strMealThumb"),
        youtube=meal.get("strYoutube") or None,
        source=meal.get("strSource") or None,
        image=meal.get("strImageSource") or None,
    )


def format_ingredient(raw: str) -> str:
    """Turn an identifier like ``chicken_breast`` into ``Chicken Breast``."""
    words = raw.replace("_", " ").replace("-", " ").split()
    return " ".join(word.capitalize() for word in words)


def build_recipe_prompt(ingredients: list[str]) -> str:
    """Return the prompt asking for a single markdown recipe."""
    return "\n".join(
        [
            "You are a helpful cooking assistant.",
            "Write one recipe that uses the following ingredients: "
            + ", ".join(ingredients)
            + ".",
            "You may assume common pantry staples such as salt, pepper and oil.",
            "Format the answer in markdown with a title, an ingredients list "
            "with quantities and numbered steps.",
        ]
    )


@dataclass
class AiRecipeService:
    """Generates recipes with the language model."""

    client: TextGenerationClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def generate(self, ingredients: list[str]) -> GeneratedRecipe:
        """Generate a markdown recipe for the given ingredients."""
        formatted = [format_ingredient(item) for item in ingredients]
        text, model = await self.client.generate(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            prompt=build_recipe_prompt(formatted),
        )
        if not text or not text.strip():
            raise ExternalServiceError("Recipe model returned an empty response")
        _logger.info("Generated recipe for %d ingredients", len(formatted))
        return GeneratedRecipe(
            recipe=text.strip(), ingredients=formatted, model=model or self.model
        )
