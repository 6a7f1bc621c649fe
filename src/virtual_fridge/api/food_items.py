"""Endpoints for the caller's food items."""

from uuid import UUID

from fastapi import APIRouter, Depends

from virtual_fridge.api.deps import get_container, get_current_user
from virtual_fridge.api.schemas import FoodItemCreate, FoodItemUpdate, food_item_json
from virtual_fridge.containers import AppContainer
from virtual_fridge.domain.users import UserRecord

router = APIRouter(prefix="/food-item", tags=["food-items"])


@router.post("")
async def create_food_item(
    body: FoodItemCreate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Create an item owned by the caller."""
    item = container.food_item_service.create(user.id, body.to_payload())
    return {
        "message": "FoodItem created successfully",
        "data": {"foodItem": food_item_json(item)},
    }


@router.put("")
async def update_food_item(
    body: FoodItemUpdate,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Change the expiration date or remaining amount of an item."""
    item = container.food_item_service.update(user.id, body.id, body.to_payload())
    return {
        "message": "FoodItem updated successfully",
        "data": {"foodItem": food_item_json(item)},
    }


@router.get("/{item_id}")
async def get_food_item(
    item_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    item = container.food_item_service.get(user.id, item_id)
    return {
        "message": "FoodItem fetched successfully",
        "data": {"foodItem": food_item_json(item)},
    }


@router.delete("/{item_id}")
async def delete_food_item(
    item_id: UUID,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    item = container.food_item_service.delete(user.id, item_id)
    return {
        "message": "FoodItem deleted successfully",
        "data": {"foodItem": food_item_json(item)},
    }
