"""Shared food type catalogue endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from virtual_fridge.api.deps import get_container, get_current_user
from virtual_fridge.api.errors import ApiError
from virtual_fridge.api.schemas import FoodTypeCreate, FoodTypeUpdate, food_type_json
from virtual_fridge.containers import AppContainer

router = APIRouter(
    prefix="/food-type",
    tags=["food-types"],
    dependencies=[Depends(get_current_user)],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food_type(
    body: FoodTypeCreate, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return food_type_json(container.food_type_service.create(body.to_payload()))


@router.put("")
async def replace_food_type(
    body: FoodTypeUpdate, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Update the food type named by ``_id`` in the body."""
    if body.id is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "FoodType ID is required")
    updated = container.food_type_service.update(body.id, body.to_payload())
    return food_type_json(updated)


@router.patch("/{type_id}")
async def update_food_type(
    type_id: UUID,
    body: FoodTypeUpdate,
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    updated = container.food_type_service.update(type_id, body.to_payload())
    return food_type_json(updated)


@router.get("/barcode/{barcode_id}")
async def get_food_type_by_barcode(
    barcode_id: str, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return food_type_json(container.food_type_service.get_by_barcode(barcode_id))


@router.get("/{type_id}")
async def get_food_type(
    type_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return food_type_json(container.food_type_service.get(type_id))


@router.delete("/{type_id}")
async def delete_food_type(
    type_id: UUID, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    return food_type_json(container.food_type_service.delete(type_id))
