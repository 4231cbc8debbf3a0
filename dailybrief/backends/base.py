"""Base interface for text-generation backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class LLMResponse:
    """Response from a generation backend."""

    content: str | None = None
    finish_reason: str = "stop"
    usage: dict[str, int] = field(default_factory=dict)

    @property
    def is_error(self) -> bool:
        """Check whether the backend reported a failure."""
        return self.finish_reason == "error"


class LLMBackend(ABC):
    """
    Abstract base class for generation backends.

    Implementations never raise on transport or API failures; they return an
    ``LLMResponse`` with ``finish_reason="error"`` and the message as content.
    """

    def __init__(self, api_key: str | None = None, api_base: str | None = None):
        self.api_key = api_key
        self.api_base = api_base

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        model: str | None = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
    ) -> LLMResponse:
        """
        Generate text for a single user prompt.

        Args:
            prompt: The prompt text.
            model: Model identifier (provider-specific).
            max_tokens: Maximum tokens in response.
            temperature: Sampling temperature.

        Returns:
            LLMResponse with the generated text.
        """

    @abstractmethod
    def get_default_model(self) -> str:
        """Get the default model for this backend."""
