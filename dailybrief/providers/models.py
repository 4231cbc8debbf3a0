"""Data models for configured AI providers."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class ProviderKind(str, Enum):
    """Backend kinds the gateway knows how to talk to."""

    GEMINI = "gemini"
    GROQ = "groq"
    OLLAMA = "ollama"
    ANTHROPIC = "anthropic"
    GROK = "grok"
    CUSTOM = "custom"


class ModelDescriptor(BaseModel):
    """A selectable generation model offered by a provider."""

    id: str
    display_name: str
    description: str | None = None
    context_length: int | None = Field(default=None, ge=0)
    max_output_tokens: int | None = Field(default=None, ge=0)


class ProviderRecord(BaseModel):
    """A configured provider, as held by the registry and persisted to storage."""

    id: str
    kind: ProviderKind
    display_name: str
    credential: str | None = None
    endpoint: str | None = None
    is_active: bool = False
    is_connected: bool = False
    models: list[ModelDescriptor] = Field(default_factory=list)
    selected_model: str | None = None
    last_tested_at: datetime | None = None

    def model_ids(self) -> list[str]:
        """Ids of the cached models, in catalog order."""
        return [m.id for m in self.models]

    def has_model(self, model_id: str) -> bool:
        return any(m.id == model_id for m in self.models)


class ProbeResult(BaseModel):
    """Normalized outcome of a connection test."""

    success: bool
    message: str
    models: list[ModelDescriptor] | None = None
    error: str | None = None

    @classmethod
    def failed(cls, message: str, error: str) -> "ProbeResult":
        return cls(success=False, message=message, error=error)
