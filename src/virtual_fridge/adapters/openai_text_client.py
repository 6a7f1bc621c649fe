"""OpenAI Responses API client for free-text generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from virtual_fridge.services.recipes import TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Text generation backed by the OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAITextClient":
        """Create an OpenAI text client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(
        self, *, model: str, reasoning_effort: str | None, store: bool, prompt: str
    ) -> tuple[str, str | None]:
        """Return the generated text and the model name reported by the API."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": prompt,
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}
        response = await self.client.responses.create(**request_payload)
        return response.output_text or "", getattr(response, "model", None)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
