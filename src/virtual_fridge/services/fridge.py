"""Fridge aggregation and food logging from barcodes and photos."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID

from virtual_fridge.adapters.openfoodfacts_client import OpenFoodFactsClient
from virtual_fridge.domain.food import FoodType, FridgeItem
from virtual_fridge.errors import NotFoundError, RepositoryError, ValidationFailedError
from virtual_fridge.services.food_items import FoodItemRepository
from virtual_fridge.services.food_types import FoodTypeRepository
from virtual_fridge.services.ingestion import (
    expiration_from_shelf_life,
    food_type_from_analysis,
    food_type_from_product,
)
from virtual_fridge.services.vision import ProduceVisionService

_logger = logging.getLogger(__name__)


@dataclass
class FridgeService:
    """Joins items with their types and logs new items."""

    food_item_repository: FoodItemRepository
    food_type_repository: FoodTypeRepository
    openfoodfacts_client: OpenFoodFactsClient
    vision_service: ProduceVisionService
    today: Callable[[], date] = field(default=lambda: datetime.now(tz=UTC).date())

    def list_fridge(self, user_id: UUID) -> list[FridgeItem]:
        """Return the user's items paired with their food types."""
        items = self.food_item_repository.list_by_user(user_id)
        type_ids = list(dict.fromkeys(item.type_id for item in items))
        types = {
            food_type.id: food_type
            for food_type in (
                self.food_type_repository.get_types(type_ids) if type_ids else []
            )
        }
        fridge_items = []
        for item in items:
            food_type = types.get(item.type_id)
            if food_type is None:
                _logger.error(
                    "Orphaned food item %s references missing type %s",
                    item.id,
                    item.type_id,
                )
                raise RepositoryError(
                    f"FoodItem {item.id} references missing FoodType {item.type_id}"
                )
            fridge_items.append(FridgeItem(food_item=item, food_type=food_type))
        return fridge_items

    async def add_from_barcode(self, user_id: UUID, barcode: str) -> FridgeItem:
        """Log an item from a barcode, importing the product when unseen."""
        _logger.debug("Received barcode: %s", barcode)
        food_type = self.food_type_repository.find_by_barcode(barcode)
        if food_type is None:
            product = await self.openfoodfacts_client.get_product(barcode)
            if not product:
                raise NotFoundError("Product not found in OpenFoodFacts")
            payload = food_type_from_product(product, barcode, self.today())
            food_type = self.food_type_repository.create_type(payload)
            _logger.info("Imported food type %s for barcode %s", food_type.id, barcode)
        return self._add_item(user_id, food_type)

    async def add_from_image(self, user_id: UUID, image_bytes: bytes) -> FridgeItem:
        """Log a fruit or vegetable recognised in a photo."""
        analysis = await self.vision_service.analyze(image_bytes)
        if not analysis.is_produce or not analysis.name:
            raise ValidationFailedError("Item detected must be a fruit or vegetable")
        food_type = self.food_type_repository.find_by_name(analysis.name)
        if food_type is None:
            food_type = self.food_type_repository.create_type(
                food_type_from_analysis(analysis)
            )
        elif food_type.nutrients is None and analysis.nutrients is not None:
            backfill = food_type_from_analysis(analysis)["nutrients"]
            food_type = (
                self.food_type_repository.update_type(
                    food_type.id, {"nutrients": backfill}
                )
                or food_type
            )
        return self._add_item(user_id, food_type)

    def _add_item(self, user_id: UUID, food_type: FoodType) -> FridgeItem:
        expiration = expiration_from_shelf_life(self.today(), food_type.shelf_life_days)
        item = self.food_item_repository.create_item(
            {
                "user_id": user_id,
                "type_id": food_type.id,
                "expiration_date": expiration,
                "percent_left": 100,
            }
        )
        return FridgeItem(food_item=item, food_type=food_type)
