"""Supabase-backed food item repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from virtual_fridge.domain.food import FoodItem
from virtual_fridge.errors import RepositoryError
from virtual_fridge.services.food_items import FoodItemRepository

_ITEM_COLUMNS = "id, type_id, user_id, expiration_date, percent_left"


@dataclass
class SupabaseFoodItemRepository(FoodItemRepository):
    """Supabase implementation for user owned food items."""

    client: Client

    def create_item(self, payload: dict[str, object]) -> FoodItem:
        """Insert a food item and return it."""
        response = (
            self.client.table("food_items").insert(_to_row(payload)).execute()
        )
        if not response.data:
            raise RepositoryError("Failed to create food item")
        return _row_to_item(response.data[0])

    def update_item(self, item_id: UUID, payload: dict[str, object]) -> FoodItem | None:
        """Update a food item and return it, or None when absent."""
        response = (
            self.client.table("food_items")
            .update(_to_row(payload))
            .eq("id", str(item_id))
            .execute()
        )
        return _row_to_item(response.data[0]) if response.data else None

    def get_item(self, item_id: UUID) -> FoodItem | None:
        """Return a food item by id, if present."""
        response = (
            self.client.table("food_items")
            .select(_ITEM_COLUMNS)
            .eq("id", str(item_id))
            .limit(1)
            .execute()
        )
        return _row_to_item(response.data[0]) if response.data else None

    def delete_item(self, item_id: UUID) -> FoodItem | None:
        """Delete a food item and return the removed row."""
        response = (
            self.client.table("food_items").delete().eq("id", str(item_id)).execute()
        )
        return _row_to_item(response.data[0]) if response.data else None

    def list_by_user(self, user_id: UUID) -> list[FoodItem]:
        """Return all items owned by a user."""
        response = (
            self.client.table("food_items")
            .select(_ITEM_COLUMNS)
            .eq("user_id", str(user_id))
            .execute()
        )
        return [_row_to_item(row) for row in response.data or []]

    def delete_by_user(self, user_id: UUID) -> None:
        """Delete all items owned by a user."""
        self.client.table("food_items").delete().eq("user_id", str(user_id)).execute()


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    row: dict[str, object] = {}
    for key, value in payload.items():
        if isinstance(value, UUID):
            row[key] = str(value)
        elif isinstance(value, datetime):
            row[key] = value.isoformat()
        else:
            row[key] = value
    return row


def _row_to_item(row: dict) -> FoodItem:
    expiration = row.get("expiration_date")
    return FoodItem(
        id=UUID(row["id"]),
        type_id=UUID(row["type_id"]),
        user_id=UUID(row["user_id"]),
        expiration_date=datetime.fromisoformat(expiration) if expiration else None,
        percent_left=int(row.get("percent_left", 100)),
    )
