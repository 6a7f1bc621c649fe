"""Request and response models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from virtual_fridge.domain.expiry import ExpiringItem
from virtual_fridge.domain.food import FoodItem, FoodType, FridgeItem
from virtual_fridge.domain.recipes import GeneratedRecipe, Recipe
from virtual_fridge.domain.users import UserRecord


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON with snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> dict[str, object]:
        """Dump with camelCase keys and JSON-compatible values."""
        return self.model_dump(by_alias=True, mode="json")


class IdTokenRequest(CamelModel):
    id_token: str = Field(min_length=1)


class GoogleAuthRequest(CamelModel):
    id_token: str | None = None


class DietaryPreferencesModel(CamelModel):
    vegetarian: bool | None = None
    vegan: bool | None = None
    halal: bool | None = None
    keto: bool | None = None


class NotificationPreferencesModel(CamelModel):
    enable_notifications: bool = True
    expiry_threshold_days: int | None = Field(default=None, ge=0)
    notification_time: int | None = Field(default=None, ge=0)


class UserOut(CamelModel):
    id: UUID = Field(alias="_id")
    google_id: str
    email: str
    name: str
    bio: str | None = None
    profile_picture: str | None = None
    hobbies: list[str] = []
    dietary_preferences: DietaryPreferencesModel | None = None
    notification_preferences: NotificationPreferencesModel | None = None
    fcm_token: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class UpdateProfileRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    bio: str | None = Field(default=None, max_length=500)
    profile_picture: str | None = None
    hobbies: list[str] | None = None
    dietary_preferences: DietaryPreferencesModel | None = None
    notification_preferences: NotificationPreferencesModel | None = None
    fcm_token: str | None = None

    def to_changes(self) -> dict[str, object]:
        """Return the explicitly provided fields keyed by column name."""
        return self.model_dump(exclude_unset=True, mode="json")


class NutrientsModel(CamelModel):
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


class FoodTypeOut(CamelModel):
    id: UUID = Field(alias="_id")
    name: str
    nutrients: NutrientsModel | None = None
    shelf_life_days: int | None = None
    barcode_id: str | None = None
    brand: str | None = None
    image: str | None = None
    allergens: list[str] = []


class FoodTypeCreate(CamelModel):
    name: str = Field(min_length=1)
    nutrients: NutrientsModel | None = None
    shelf_life_days: int | None = Field(default=None, ge=0)
    barcode_id: str | None = None
    brand: str | None = None
    image: str | None = None
    allergens: list[str] = []

    def to_payload(self) -> dict[str, object]:
        """Return column values, omitting unset nutrient fields."""
        return _food_type_payload(self.model_dump(exclude_unset=True, mode="json"))


class FoodTypeUpdate(CamelModel):
    id: UUID | None = Field(default=None, alias="_id")
    name: str | None = Field(default=None, min_length=1)
    nutrients: NutrientsModel | None = None
    shelf_life_days: int | None = Field(default=None, ge=0)
    barcode_id: str | None = None
    brand: str | None = None
    image: str | None = None
    allergens: list[str] | None = None

    def to_payload(self) -> dict[str, object]:
        """Return the provided column values without the id."""
        raw = self.model_dump(exclude_unset=True, exclude={"id"}, mode="json")
        return _food_type_payload(raw)


class FoodItemOut(CamelModel):
    id: UUID = Field(alias="_id")
    type_id: UUID
    user_id: UUID
    expiration_date: datetime | None = None
    percent_left: int


class FoodItemCreate(CamelModel):
    type_id: UUID
    expiration_date: datetime | None = None
    percent_left: int = Field(default=100, ge=0, le=100)

    def to_payload(self) -> dict[str, object]:
        return self.model_dump()


class FoodItemUpdate(CamelModel):
    id: UUID = Field(alias="_id")
    expiration_date: datetime | None = None
    percent_left: int | None = Field(default=None, ge=0, le=100)

    def to_payload(self) -> dict[str, object]:
        return self.model_dump(exclude_unset=True, exclude={"id"})


class BarcodeRequest(CamelModel):
    barcode: str = Field(min_length=1)


class AiRecipeRequest(CamelModel):
    ingredients: list[str] = Field(min_length=1)


class SimplePushRequest(CamelModel):
    fcm_token: str | None = None


def user_json(user: UserRecord) -> dict[str, object]:
    """Serialize a user for API responses."""
    return UserOut.model_validate(user).to_json()


def food_type_json(food_type: FoodType) -> dict[str, object]:
    """Serialize a food type, dropping unset nutrient values."""
    payload = FoodTypeOut.model_validate(food_type).to_json()
    if payload["nutrients"] is not None:
        payload["nutrients"] = {
            key: value for key, value in payload["nutrients"].items() if value
        }
    return payload


def food_item_json(item: FoodItem) -> dict[str, object]:
    """Serialize a food item."""
    return FoodItemOut.model_validate(item).to_json()


def fridge_item_json(fridge_item: FridgeItem) -> dict[str, object]:
    """Serialize an item together with its type."""
    return {
        "foodItem": food_item_json(fridge_item.food_item),
        "foodType": food_type_json(fridge_item.food_type),
    }


def expiring_item_json(item: ExpiringItem) -> dict[str, object]:
    return {
        "name": item.name,
        "expirationDate": item.expiration_date.isoformat(),
        "daysUntilExpiry": item.days_until,
    }


def recipe_json(recipe: Recipe) -> dict[str, object]:
    return {
        "name": recipe.name,
        "instructions": recipe.instructions,
        "thumbnail": recipe.thumbnail,
        "youtube": recipe.youtube,
        "ingredients": [
            {"name": ingredient.name, "measure": ingredient.measure}
            for ingredient in recipe.ingredients
        ],
        "source": recipe.source,
        "image": recipe.image,
    }


def generated_recipe_json(generated: GeneratedRecipe) -> dict[str, object]:
    return {
        "recipe": generated.recipe,
        "ingredients": generated.ingredients,
        "model": generated.model,
    }


def _food_type_payload(raw: dict[str, object]) -> dict[str, object]:
    nutrients = raw.get("nutrients")
    if isinstance(nutrients, dict):
        raw["nutrients"] = {
            key: value for key, value in nutrients.items() if value is not None
        }
    return raw
