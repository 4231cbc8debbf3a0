"""Text-generation backends."""

from dailybrief.backends.base import LLMBackend, LLMResponse
from dailybrief.backends.factory import create_backend
from dailybrief.backends.openai_compat import OpenAICompatibleBackend

__all__ = ["LLMBackend", "LLMResponse", "OpenAICompatibleBackend", "create_backend"]


# Lazy imports to avoid hard dependencies on optional SDKs.
def __getattr__(name: str):  # noqa: N807
    if name == "AnthropicBackend":
        from dailybrief.backends.anthropic import AnthropicBackend
        return AnthropicBackend
    if name == "GeminiBackend":
        from dailybrief.backends.gemini import GeminiBackend
        return GeminiBackend
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
