"""Services for user owned food items."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from virtual_fridge.domain.food import FoodItem
from virtual_fridge.errors import NotFoundError
from virtual_fridge.services.food_types import FoodTypeRepository


class FoodItemRepository(Protocol):
    """Persistence interface for food items."""

    def create_item(self, payload: dict[str, object]) -> FoodItem:
        """Create a food item and return it."""

    def update_item(self, item_id: UUID, payload: dict[str, object]) -> FoodItem | None:
        """Update a food item and return it, or None when absent."""

    def get_item(self, item_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""

    def delete_item(self, item_id: UUID) -> FoodItem | None:
        """Delete a food item and return it, or None when absent."""

    def list_by_user(self, user_id: UUID) -> list[FoodItem]:
        """Return all items owned by a user."""

    def delete_by_user(self, user_id: UUID) -> None:
        """Delete all items owned by a user."""


@dataclass
class FoodItemService:
    """Application service for food item operations."""

    repository: FoodItemRepository
    food_type_repository: FoodTypeRepository

    def create(self, user_id: UUID, payload: dict[str, object]) -> FoodItem:
        """Create an item for the user; the referenced type must exist."""
        type_id = payload["type_id"]
        if self.food_type_repository.get_type(type_id) is None:
            raise NotFoundError(f"FoodType with ID {type_id} not found.")
        return self.repository.create_item({**payload, "user_id": user_id})

    def update(
        self, user_id: UUID, item_id: UUID, payload: dict[str, object]
    ) -> FoodItem:
        """Update expiration or consumption of an owned item."""
        self.get(user_id, item_id)
        updated = self.repository.update_item(item_id, payload)
        if updated is None:
            raise NotFoundError(f"FoodItem with ID {item_id} not found.")
        return updated

    def get(self, user_id: UUID, item_id: UUID) -> FoodItem:
        """Return an owned item; other users' items are reported as missing."""
        item = self.repository.get_item(item_id)
        if item is None or item.user_id != user_id:
            raise NotFoundError(f"FoodItem with ID {item_id} not found.")
        return item

    def delete(self, user_id: UUID, item_id: UUID) -> FoodItem:
        """Delete an owned item."""
        self.get(user_id, item_id)
        deleted = self.repository.delete_item(item_id)
        if deleted is None:
            raise NotFoundError(f"FoodItem with ID {item_id} not found.")
        return deleted

    def list_for_user(self, user_id: UUID) -> list[FoodItem]:
        """Return every item owned by the user."""
        return self.repository.list_by_user(user_id)
