"""Domain models for recipe suggestions."""

from dataclasses import dataclass, field

DEFAULT_RECIPE_INGREDIENTS = ["chicken_breast"]


@dataclass(frozen=True)
class RecipeIngredient:
    """Ingredient line of a recipe."""

    name: str
    measure: str


@dataclass(frozen=True)
class Recipe:
    """Recipe fetched from the external recipe catalogue."""

    name: str
    instructions: str
    ingredients: list[RecipeIngredient] = field(default_factory=list)
    thumbnail: str | None = None
    youtube: str | None = None
    source: str | None = None
    image: str | None = None


@dataclass(frozen=True)
class GeneratedRecipe:
    """Recipe text generated by the language model."""

    recipe: str
    ingredients: list[str]
    model: str | None
