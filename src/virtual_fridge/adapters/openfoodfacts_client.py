"""OpenFoodFacts product API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class OpenFoodFactsClient(Protocol):
    """Interface for barcode product lookups."""

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        """Return the raw product payload, or None when the barcode is unknown."""


@dataclass
class HttpxOpenFoodFactsClient(OpenFoodFactsClient):
    """HTTPX-backed OpenFoodFacts client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        """Fetch a product by barcode."""
        url = f"{self.base_url}/product/{barcode}.json"
        response = await self.http_client.get(url, params={"lc": "en"}, timeout=15)
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        response.raise_for_status()
        payload = response.json()
        product = payload.get("product") if isinstance(payload, dict) else None
        return product or None

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
