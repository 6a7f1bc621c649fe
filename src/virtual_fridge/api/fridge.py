"""Fridge view, barcode logging and image endpoints."""

import logging

import httpx
import openai
import pydantic
from fastapi import APIRouter, Depends, File, UploadFile, status

from virtual_fridge.api.deps import get_container, get_current_user
from virtual_fridge.api.errors import ApiError
from virtual_fridge.api.schemas import BarcodeRequest, fridge_item_json
from virtual_fridge.containers import AppContainer
from virtual_fridge.domain.users import UserRecord
from virtual_fridge.errors import ExternalServiceError

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/fridge", tags=["fridge"])
media_router = APIRouter(prefix="/media", tags=["media"])


@router.get("")
async def list_fridge(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the caller's items joined with their food types."""
    fridge_items = container.fridge_service.list_fridge(user.id)
    return {
        "message": "Fridge items fetched successfully",
        "data": {"fridgeItems": [fridge_item_json(item) for item in fridge_items]},
    }


@router.post("/barcode")
async def add_from_barcode(
    body: BarcodeRequest,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Log an item by barcode, importing the product from OpenFoodFacts."""
    try:
        fridge_item = await container.fridge_service.add_from_barcode(
            user.id, body.barcode
        )
    except httpx.HTTPError as exc:
        _logger.exception("Error handling barcode %s", body.barcode)
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
        ) from exc
    return {
        "message": "Successfully created item from barcode",
        "data": {"fridgeItem": fridge_item_json(fridge_item)},
    }


@media_router.post("/vision")
async def add_from_image(
    media: UploadFile | None = File(default=None),
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Recognise a fruit or vegetable in a photo and log it."""
    if media is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "No file uploaded")
    image_bytes = await media.read()
    try:
        fridge_item = await container.fridge_service.add_from_image(
            user.id, image_bytes
        )
    except (ExternalServiceError, openai.OpenAIError, pydantic.ValidationError) as exc:
        _logger.exception("Produce analysis failed for user %s", user.id)
        raise ApiError(
            status.HTTP_502_BAD_GATEWAY, "Failed to analyze image"
        ) from exc
    return {
        "message": "Successfully created item from image",
        "data": {"fridgeItem": fridge_item_json(fridge_item)},
    }


@media_router.post("/upload")
async def upload_image(
    media: UploadFile | None = File(default=None),
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Store an image for the caller and return its URL."""
    if media is None:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "No file uploaded")
    content = await media.read()
    image = container.media_service.save_image(
        user.id, media.filename or "upload.jpg", content
    )
    return {"message": "Image uploaded successfully", "data": {"image": image}}
