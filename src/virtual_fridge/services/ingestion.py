"""Mapping of third-party product and vision payloads into food types."""

import re
from datetime import UTC, date, datetime, time, timedelta

from virtual_fridge.domain.food import Nutrients
from virtual_fridge.domain.vision import ProduceAnalysis

_KJ_PER_KCAL = 4.184

_NUTRIENT_KEYS = {
    "energy_kj": ("energy-kj_100g", "energy_100g"),
    "protein": ("proteins_100g",),
    "fat": ("fat_100g",),
    "saturated_fat": ("saturated-fat_100g",),
    "monounsaturated_fat": ("monounsaturated-fat_100g",),
    "polyunsaturated_fat": ("polyunsaturated-fat_100g",),
    "trans_fat": ("trans-fat_100g",),
    "cholesterol": ("cholesterol_100g",),
    "carbohydrates": ("carbohydrates_100g",),
    "sugars": ("sugars_100g",),
    "fiber": ("fiber_100g",),
    "salt": ("salt_100g",),
    "sodium": ("sodium_100g",),
    "calcium": ("calcium_100g",),
    "iron": ("iron_100g",),
    "magnesium": ("magnesium_100g",),
    "potassium": ("potassium_100g",),
    "zinc": ("zinc_100g",),
    "caffeine": ("caffeine_100g",),
}


def food_type_from_product(
    product: dict[str, object], barcode: str, today: date
) -> dict[str, object]:
    """Build a food type payload from an OpenFoodFacts product."""
    nutriments = product.get("nutriments") or {}
    nutrients = {"calories": _calories(nutriments)}
    for field_name, keys in _NUTRIENT_KEYS.items():
        nutrients[field_name] = _first_present(nutriments, keys)

    shelf_life_days = None
    raw_expiry = product.get("expiration_date") or product.get("expiry_date")
    if isinstance(raw_expiry, str) and raw_expiry.strip():
        expiry = parse_product_date(raw_expiry)
        if expiry is not None:
            shelf_life_days = max((expiry - today).days, 0)

    return {
        "name": (
            product.get("product_name_en") or product.get("product_name") or barcode
        ),
        "brand": product.get("brands") or None,
        "image": product.get("image_url") or None,
        "barcode_id": barcode,
        "allergens": _english_allergens(product.get("allergens_hierarchy")),
        "shelf_life_days": shelf_life_days,
        "nutrients": Nutrients.from_dict(nutrients).to_dict(),
    }


def food_type_from_analysis(analysis: ProduceAnalysis) -> dict[str, object]:
    """Build a food type payload from a produce analysis."""
    nutrients = analysis.nutrients.model_dump() if analysis.nutrients else {}
    return {
        "name": analysis.name,
        "shelf_life_days": analysis.shelf_life_days,
        "allergens": [],
        "nutrients": Nutrients.from_dict(nutrients).to_dict(),
    }


def parse_product_date(raw: str) -> date | None:
    """Parse printed product dates: yyyy-mm-dd, dd/mm/yyyy, or mm/yyyy."""
    try:
        parts = [int(part) for part in re.findall(r"\d+", raw)]
        if len(parts) >= 3 and parts[0] > 31:
            return date(parts[0], parts[1], parts[2])
        if len(parts) >= 3:
            return date(parts[2], parts[1], parts[0])
        if len(parts) == 2:
            return date(parts[1], parts[0], 1)
    except (ValueError, OverflowError):
        return None
    return None


def expiration_from_shelf_life(
    today: date, shelf_life_days: int | None
) -> datetime | None:
    """Return midnight UTC of today plus shelf life, or None when unknown."""
    if shelf_life_days is None:
        return None
    expires_on = today + timedelta(days=shelf_life_days)
    return datetime.combine(expires_on, time.min, tzinfo=UTC)


def _calories(nutriments: dict[str, object]) -> object | None:
    calories = _first_present(
        nutriments, ("energy-kcal_100g", "energy-kcal_serving", "energy-kcal")
    )
    if calories is None and nutriments.get("energy_100g"):
        try:
            calories = round(float(nutriments["energy_100g"]) / _KJ_PER_KCAL)
        except (ValueError, OverflowError):
            return None
    return calories


def _first_present(mapping: dict[str, object], keys: tuple[str, ...]) -> object | None:
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None


def _english_allergens(raw: object) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [
        entry.removeprefix("en:")
        for entry in raw
        if isinstance(entry, str) and entry.startswith("en:")
    ]
