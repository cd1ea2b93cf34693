"""OpenAI Responses API client for food analysis."""

import json
from dataclasses import dataclass
from typing import Any

from openai import APIError, AsyncOpenAI

from nutrition_macros.domain.analysis import UpstreamCallError
from nutrition_macros.services.analysis import AnalysisClient


@dataclass
class OpenAIAnalysisClient(AnalysisClient):
    """Analysis client backed by OpenAI Responses API in JSON mode."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIAnalysisClient":
        """Create an OpenAI analysis client."""
        return cls(client=AsyncOpenAI(api_key=api_key, max_retries=0))

    async def analyze(self, *, model: str, store: bool, prompt: str) -> dict[str, Any]:
        """Send one request and parse the reply as a single JSON object."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
            "text": {"format": {"type": "json_object"}},
            "store": store,
        }
        try:
            response = await self.client.responses.create(**request_payload)
        except APIError as exc:
            raise UpstreamCallError(
                f"Nutrition analysis service error: {exc.message}"
            ) from exc

        output_text = response.output_text
        if not output_text:
            raise UpstreamCallError(
                "Nutrition analysis service returned an empty response"
            )
        try:
            parsed = json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise UpstreamCallError(
                "Nutrition analysis service returned malformed JSON"
            ) from exc
        if not isinstance(parsed, dict):
            raise UpstreamCallError(
                "Nutrition analysis service did not return a JSON object"
            )
        return parsed

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
