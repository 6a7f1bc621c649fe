"""OpenAI Responses API client for produce recognition."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from virtual_fridge.errors import ExternalServiceError
from virtual_fridge.services.vision import VisionClient


@dataclass
class OpenAIVisionClient(VisionClient):
    """Vision client returning schema-constrained JSON from an image."""

    client: AsyncOpenAI
    format_name: str = "produce_analysis"

    @classmethod
    def create(cls, api_key: str) -> "OpenAIVisionClient":
        """Create an OpenAI vision client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

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
        """Send the prompt with the image and decode the structured answer."""
        message = {
            "role": "user",
            "content": [
                {"type": "input_text", "text": prompt},
                {"type": "input_image", "image_url": image_data_url},
            ],
        }
        request_payload: dict[str, object] = {
            "model": model,
            "input": [message],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": self.format_name,
                    "strict": True,
                    "schema": schema,
                }
            },
            "store": store,
        }
        if reasoning_effort:
            request_payload["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        if not response.output_text:
            raise ExternalServiceError("Vision model returned an empty response")
        try:
            return json.loads(response.output_text)
        except json.JSONDecodeError as exc:
            raise ExternalServiceError("Vision model returned invalid JSON") from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
