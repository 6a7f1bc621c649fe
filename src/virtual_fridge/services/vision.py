"""Produce recognition service using LLM vision."""

import base64
from dataclasses import dataclass
from typing import Protocol

from virtual_fridge.domain.vision import NutrientsPer100g, ProduceAnalysis

_NULLABLE_STRING: dict[str, object] = {"anyOf": [{"type": "string"}, {"type": "null"}]}

NUTRIENTS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {name: _NULLABLE_STRING for name in NutrientsPer100g.model_fields},
    "required": list(NutrientsPer100g.model_fields),
    "additionalProperties": False,
}

PRODUCE_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "is_produce": {"type": "boolean"},
        "category": {
            "anyOf": [
                {"type": "string", "enum": ["fruit", "vegetable"]},
                {"type": "null"},
            ]
        },
        "name": _NULLABLE_STRING,
        "nutrients": {"anyOf": [NUTRIENTS_SCHEMA, {"type": "null"}]},
        "shelf_life_days": {
            "anyOf": [{"type": "integer", "minimum": 0}, {"type": "null"}]
        },
    },
    "required": ["is_produce", "category", "name", "nutrients", "shelf_life_days"],
    "additionalProperties": False,
}

PRODUCE_PROMPT = "\n".join(
    [
        "You are a vision model helping identify produce items for a smart fridge.",
        "Determine if the image contains a single food item that is a fruit "
        "or a vegetable only.",
        "If yes, set is_produce to true, category to fruit or vegetable, name to "
        "the common English name, nutrients to per-100g estimates as strings, "
        "and shelf_life_days to the typical refrigerated shelf life.",
        "Otherwise set is_produce to false and every other field to null.",
    ]
)


class VisionClient(Protocol):
    """Interface for LLM vision extraction."""

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Return structured vision extraction data."""


@dataclass
class ProduceVisionService:
    """Service that prepares the produce prompt and validates results."""

    client: VisionClient
    model: str
    reasoning_effort: str | None
    store: bool

    async def analyze(self, image_bytes: bytes) -> ProduceAnalysis:
        """Classify an image as a single fruit or vegetable."""
        raw = await self.client.extract(
            model=self.model,
            reasoning_effort=self.reasoning_effort,
            store=self.store,
            image_data_url=_to_data_url(image_bytes),
            schema=PRODUCE_SCHEMA,
            prompt=PRODUCE_PROMPT,
        )
        return ProduceAnalysis.model_validate(raw)


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
