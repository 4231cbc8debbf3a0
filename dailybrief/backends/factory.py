"""Build a generation backend for a configured provider."""

import os

from dailybrief.backends.base import LLMBackend
from dailybrief.errors import InvalidProviderConfigError
from dailybrief.providers.catalog import (
    GEMINI_DEFAULT_MODEL,
    OLLAMA_DEFAULT_ENDPOINT,
    get_template,
    kind_label,
    requires_credential,
)
from dailybrief.providers.models import ProviderKind, ProviderRecord

GEMINI_API_KEY_ENV = "GEMINI_API_KEY"


def resolve_model(record: ProviderRecord) -> str | None:
    """The selected model, else the first cached one."""
    if record.selected_model:
        return record.selected_model
    if record.models:
        return record.models[0].id
    return None


def create_backend(record: ProviderRecord, timeout: float = 120.0) -> LLMBackend:
    """Instantiate the backend that serves ``record``.

    Uses lazy imports so a missing SDK only errors when that provider is selected.

    Raises:
        InvalidProviderConfigError: The record lacks a credential or model it
            needs to serve requests.
    """
    label = kind_label(record.kind)
    if requires_credential(record.kind) and not record.credential:
        raise InvalidProviderConfigError(f"{label} API key is not configured")

    model = resolve_model(record)

    if record.kind == ProviderKind.GEMINI:
        from dailybrief.backends.gemini import GeminiBackend

        return GeminiBackend(
            api_key=record.credential or os.environ.get(GEMINI_API_KEY_ENV),
            default_model=model or GEMINI_DEFAULT_MODEL.id,
            timeout=timeout,
        )

    if not model:
        raise InvalidProviderConfigError(
            f"No model selected for {record.display_name}; fetch its models first"
        )

    if record.kind == ProviderKind.ANTHROPIC:
        from dailybrief.backends.anthropic import AnthropicBackend

        return AnthropicBackend(
            api_key=record.credential,
            api_base=_endpoint(record),
            default_model=model,
            timeout=timeout,
        )

    from dailybrief.backends.openai_compat import OpenAICompatibleBackend

    if record.kind == ProviderKind.OLLAMA:
        base = (record.endpoint or OLLAMA_DEFAULT_ENDPOINT).rstrip("/")
        return OpenAICompatibleBackend(
            api_base=f"{base}/v1", default_model=model, timeout=timeout
        )

    api_base = _endpoint(record)
    if not api_base:
        raise InvalidProviderConfigError(f"{label} requires a base URL")
    return OpenAICompatibleBackend(
        api_key=record.credential or None,
        api_base=api_base,
        default_model=model,
        timeout=timeout,
    )


def _endpoint(record: ProviderRecord) -> str | None:
    if record.endpoint:
        return record.endpoint
    template = get_template(record.kind)
    return template.endpoint if template else None
