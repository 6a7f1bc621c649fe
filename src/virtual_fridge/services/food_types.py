"""Services for shared food types."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from virtual_fridge.domain.food import FoodType
from virtual_fridge.errors import NotFoundError


class FoodTypeRepository(Protocol):
    """Persistence interface for food types."""

    def create_type(self, payload: dict[str, object]) -> FoodType:
        """Create a food type and return it."""

    def update_type(self, type_id: UUID, payload: dict[str, object]) -> FoodType | None:
        """Update a food type and return it, or None when absent."""

    def get_type(self, type_id: UUID) -> FoodType | None:
        """Return a food type by id, if present."""

    def get_types(self, type_ids: list[UUID]) -> list[FoodType]:
        """Return the food types among the given ids."""

    def delete_type(self, type_id: UUID) -> FoodType | None:
        """Delete a food type and return it, or None when absent."""

    def find_by_barcode(self, barcode_id: str) -> FoodType | None:
        """Return the food type registered for a barcode, if present."""

    def find_by_name(self, name: str) -> FoodType | None:
        """Return a food type matching a name case-insensitively."""


@dataclass
class FoodTypeService:
    """Application service for food type operations."""

    repository: FoodTypeRepository

    def create(self, payload: dict[str, object]) -> FoodType:
        """Create a food type."""
        return self.repository.create_type(payload)

    def update(self, type_id: UUID, payload: dict[str, object]) -> FoodType:
        """Update a food type or raise NotFoundError."""
        updated = self.repository.update_type(type_id, payload)
        if updated is None:
            raise NotFoundError(f"FoodType with ID {type_id} not found.")
        return updated

    def get(self, type_id: UUID) -> FoodType:
        """Return a food type or raise NotFoundError."""
        food_type = self.repository.get_type(type_id)
        if food_type is None:
            raise NotFoundError(f"FoodType with ID {type_id} not found.")
        return food_type

    def delete(self, type_id: UUID) -> FoodType:
        """Delete a food type or raise NotFoundError."""
        deleted = self.repository.delete_type(type_id)
        if deleted is None:
            raise NotFoundError(f"FoodType with ID {type_id} not found.")
        return deleted

    def get_by_barcode(self, barcode_id: str) -> FoodType:
        """Return the food type for a barcode or raise NotFoundError."""
        food_type = self.repository.find_by_barcode(barcode_id)
        if food_type is None:
            raise NotFoundError(f"FoodType with barcode {barcode_id} not found.")
        return food_type

    def names_by_id(self, type_ids: list[UUID]) -> dict[UUID, str]:
        """Map type ids to display names for the given ids."""
        unique_ids = list(dict.fromkeys(type_ids))
        if not unique_ids:
            return {}
        return {
            food_type.id: food_type.name
            for food_type in self.repository.get_types(unique_ids)
        }
