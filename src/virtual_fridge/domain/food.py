"""Domain models for food types, owned items and the fridge view."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Nutrients:
    """Per-100g nutrient values, kept as strings for passthrough."""

    calories: str | None = None
    energy_kj: str | None = None
    protein: str | None = None
    fat: str | None = None
    saturated_fat: str | None = None
    trans_fat: str | None = None
    monounsaturated_fat: str | None = None
    polyunsaturated_fat: str | None = None
    cholesterol: str | None = None
    salt: str | None = None
    sodium: str | None = None
    carbohydrates: str | None = None
    fiber: str | None = None
    sugars: str | None = None
    calcium: str | None = None
    iron: str | None = None
    magnesium: str | None = None
    zinc: str | None = None
    potassium: str | None = None
    caffeine: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Return only the nutrient values that are set."""
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }

    @classmethod
    def from_dict(cls, raw: dict[str, object] | None) -> "Nutrients":
        """Build nutrients from a mapping, ignoring unknown keys."""
        if not raw:
            return cls()
        known = {item.name for item in fields(cls)}
        return cls(
            **{
                key: str(value)
                for key, value in raw.items()
                if key in known and value is not None
            }
        )


@dataclass(frozen=True)
class FoodType:
    """A kind of food shared across users."""

    id: UUID
    name: str
    nutrients: Nutrients | None = None
    shelf_life_days: int | None = None
    barcode_id: str | None = None
    brand: str | None = None
    image: str | None = None
    allergens: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FoodItem:
    """A unit of food owned by a user."""

    id: UUID
    type_id: UUID
    user_id: UUID
    expiration_date: datetime | None
    percent_left: int


@dataclass(frozen=True)
class FridgeItem:
    """Read-time join of an item and its type."""

    food_item: FoodItem
    food_type: FoodType
