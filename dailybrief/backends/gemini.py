"""Google Gemini generation backend using the google-genai SDK."""

import asyncio
from typing import Any

from google import genai
from google.genai import types

from dailybrief.backends.base import LLMBackend, LLMResponse


class GeminiBackend(LLMBackend):
    """
    Backend for Google Gemini models.

    Uses the google-genai SDK (synchronous) with asyncio.to_thread for async compat.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_base: str | None = None,
        default_model: str = "gemini-2.5-flash",
        timeout: float = 120.0,
    ):
        super().__init__(api_key, api_base)
        self.default_model = default_model
        self.timeout = timeout
        self.client = genai.Client(api_key=api_key)

    async def generate(
        self,
        prompt: str,
        model: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Send a generate_content request."""
        try:
            config = types.GenerateContentConfig(
                max_output_tokens=max_tokens,
                temperature=temperature,
            )
            response = await asyncio.to_thread(
                self.client.models.generate_content,
                model=model or self.default_model,
                contents=prompt,
                config=config,
            )
            return self._parse_response(response)
        except Exception as e:
            return LLMResponse(
                content=f"Gemini request failed: {e}",
                finish_reason="error",
            )

    @staticmethod
    def _parse_response(response: Any) -> LLMResponse:
        """Parse Gemini response into LLMResponse."""
        candidate = response.candidates[0]
        text_parts = [part.text for part in candidate.content.parts if part.text]

        usage = {}
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                "total_tokens": response.usage_metadata.total_token_count or 0,
            }

        finish = candidate.finish_reason.name.lower() if candidate.finish_reason else "stop"

        return LLMResponse(
            content="\n".join(text_parts) if text_parts else None,
            finish_reason=finish,
            usage=usage,
        )

    def get_default_model(self) -> str:
        """Get the default model."""
        return self.default_model
