"""Models for produce vision analysis results."""

from typing import Literal

from pydantic import BaseModel, Field


class NutrientsPer100g(BaseModel):
    """Nutrient estimates returned by the vision model."""

    calories: str | None = None
    energy_kj: str | None = None
    protein: str | None = None
    fat: str | None = None
    saturated_fat: str | None = None
    monounsaturated_fat: str | None = None
    polyunsaturated_fat: str | None = None
    trans_fat: str | None = None
    cholesterol: str | None = None
    carbohydrates: str | None = None
    sugars: str | None = None
    fiber: str | None = None
    salt: str | None = None
    sodium: str | None = None
    calcium: str | None = None
    iron: str | None = None
    magnesium: str | None = None
    potassium: str | None = None
    zinc: str | None = None
    caffeine: str | None = None


class ProduceAnalysis(BaseModel):
    """Structured output for produce detection."""

    is_produce: bool
    category: Literal["fruit", "vegetable"] | None = None
    name: str | None = None
    nutrients: NutrientsPer100g | None = None
    shelf_life_days: int | None = Field(default=None, ge=0)
