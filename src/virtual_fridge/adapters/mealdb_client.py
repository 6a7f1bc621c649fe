"""TheMealDB recipe API client."""

from dataclasses import dataclass

import httpx

from virtual_fridge.services.recipes import MealDbClient


@dataclass
class HttpxMealDbClient(MealDbClient):
    """HTTPX-backed TheMealDB client."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxMealDbClient":
        """Create a client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def filter_by_ingredients(self, ingredients: list[str]) -> list[dict]:
        """Return meal summaries for a comma-separated ingredient filter."""
        response = await self.http_client.get(
            f"{self.base_url}/filter.php",
            params={"i": ",".join(ingredients)},
            timeout=15,
        )
        response.raise_for_status()
        return response.json().get("meals") or []

    async def lookup_meal(self, meal_id: str) -> dict | None:
        """Return the full meal record for an id."""
        response = await self.http_client.get(
            f"{self.base_url}/lookup.php", params={"i": meal_id}, timeout=15
        )
        response.raise_for_status()
        meals = response.json().get("meals") or []
        return meals[0] if meals else None

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
