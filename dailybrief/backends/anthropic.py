"""Anthropic generation backend using the official SDK."""

from typing import Any

import anthropic

from dailybrief.backends.base import LLMBackend, LLMResponse


class AnthropicBackend(LLMBackend):
    """Backend for the Anthropic Messages API."""

    DEFAULT_BASE_URL = "https://api.anthropic.com"

    def __init__(
        self,
        api_key: str | None = None,
        api_base: str | None = None,
        default_model: str = "claude-3-haiku-20240307",
        timeout: float = 120.0,
    ):
        super().__init__(api_key, api_base)
        self.default_model = default_model
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key,
            base_url=_sdk_base_url(api_base) or self.DEFAULT_BASE_URL,
            timeout=timeout,
        )

    async def generate(
        self,
        prompt: str,
        model: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """Send a messages request."""
        try:
            response = await self.client.messages.create(
                model=model or self.default_model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
            return self._parse_response(response)
        except anthropic.APIStatusError as e:
            return LLMResponse(
                content=f"API error ({e.status_code}): {str(e.message)[:500]}",
                finish_reason="error",
            )
        except Exception as e:
            return LLMResponse(
                content=f"Request failed: {str(e)}",
                finish_reason="error",
            )

    @staticmethod
    def _parse_response(response: Any) -> LLMResponse:
        """Parse an Anthropic Message into our standard format."""
        text_parts = [block.text for block in response.content if block.type == "text"]

        usage = {}
        if response.usage:
            usage = {
                "prompt_tokens": response.usage.input_tokens,
                "completion_tokens": response.usage.output_tokens,
                "total_tokens": response.usage.input_tokens + response.usage.output_tokens,
            }

        return LLMResponse(
            content="\n\n".join(text_parts) if text_parts else None,
            finish_reason=response.stop_reason or "stop",
            usage=usage,
        )

    def get_default_model(self) -> str:
        """Get the default model."""
        return self.default_model


def _sdk_base_url(api_base: str | None) -> str | None:
    """The SDK appends ``/v1`` itself, so strip it from stored endpoints."""
    if not api_base:
        return None
    base = api_base.rstrip("/")
    return base[: -len("/v1")] if base.endswith("/v1") else base
