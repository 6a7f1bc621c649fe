"""Supabase-backed food type repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from virtual_fridge.domain.food import FoodType, Nutrients
from virtual_fridge.errors import RepositoryError
from virtual_fridge.services.food_types import FoodTypeRepository

_TYPE_COLUMNS = (
    "id, name, nutrients, shelf_life_days, barcode_id, brand, image, allergens"
)


@dataclass
class SupabaseFoodTypeRepository(FoodTypeRepository):
    """Supabase implementation for the shared food type catalogue."""

    client: Client

    def create_type(self, payload: dict[str, object]) -> FoodType:
        """Insert a food type and return it."""
        response = self.client.table("food_types").insert(payload).execute()
        if not response.data:
            raise RepositoryError("Failed to create food type")
        return _row_to_type(response.data[0])

    def update_type(self, type_id: UUID, payload: dict[str, object]) -> FoodType | None:
        """Update a food type and return it, or None when absent."""
        response = (
            self.client.table("food_types")
            .update(payload)
            .eq("id", str(type_id))
            .execute()
        )
        return _row_to_type(response.data[0]) if response.data else None

    def get_type(self, type_id: UUID) -> FoodType | None:
        """Return a food type by id, if present."""
        response = (
            self.client.table("food_types")
            .select(_TYPE_COLUMNS)
            .eq("id", str(type_id))
            .limit(1)
            .execute()
        )
        return _row_to_type(response.data[0]) if response.data else None

    def get_types(self, type_ids: list[UUID]) -> list[FoodType]:
        """Return the food types among the given ids in one query."""
        response = (
            self.client.table("food_types")
            .select(_TYPE_COLUMNS)
            .in_("id", [str(type_id) for type_id in type_ids])
            .execute()
        )
        return [_row_to_type(row) for row in response.data or []]

    def delete_type(self, type_id: UUID) -> FoodType | None:
        """Delete a food type and return the removed row."""
        response = (
            self.client.table("food_types").delete().eq("id", str(type_id)).execute()
        )
        return _row_to_type(response.data[0]) if response.data else None

    def find_by_barcode(self, barcode_id: str) -> FoodType | None:
        """Return the food type registered for a barcode, if present."""
        response = (
            self.client.table("food_types")
            .select(_TYPE_COLUMNS)
            .eq("barcode_id", barcode_id)
            .limit(1)
            .execute()
        )
        return _row_to_type(response.data[0]) if response.data else None

    def find_by_name(self, name: str) -> FoodType | None:
        """Return a food type whose name matches case-insensitively."""
        escaped = name.replace("\\", "\\\\").replace("%", r"\%").replace("_", r"\_")
        response = (
            self.client.table("food_types")
            .select(_TYPE_COLUMNS)
            .ilike("name", escaped)
            .limit(1)
            .execute()
        )
        return _row_to_type(response.data[0]) if response.data else None


def _row_to_type(row: dict) -> FoodType:
    nutrients = row.get("nutrients")
    return FoodType(
        id=UUID(row["id"]),
        name=row["name"],
        nutrients=Nutrients.from_dict(nutrients) if nutrients else None,
        shelf_life_days=row.get("shelf_life_days"),
        barcode_id=row.get("barcode_id"),
        brand=row.get("brand"),
        image=row.get("image"),
        allergens=list(row.get("allergens") or []),
    )
