"""Per-kind connection probes using httpx."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from dailybrief.providers.catalog import (
    GEMINI_DEFAULT_MODEL,
    OLLAMA_DEFAULT_ENDPOINT,
    get_template,
    kind_label,
    requires_credential,
)
from dailybrief.providers.models import ModelDescriptor, ProbeResult, ProviderKind, ProviderRecord

logger = logging.getLogger(__name__)

ANTHROPIC_VERSION = "2023-06-01"
ANTHROPIC_PROBE_MODEL = "claude-3-haiku-20240307"

ANTHROPIC_MODELS = [
    ModelDescriptor(
        id="claude-3-haiku-20240307",
        display_name="Claude 3 Haiku",
        description="Fast and efficient model for general tasks",
        context_length=200000,
        max_output_tokens=4096,
    ),
    ModelDescriptor(
        id="claude-3-sonnet-20240229",
        display_name="Claude 3 Sonnet",
        description="Balanced model for most use cases",
        context_length=200000,
        max_output_tokens=4096,
    ),
    ModelDescriptor(
        id="claude-3-opus-20240229",
        display_name="Claude 3 Opus",
        description="Most capable model for complex tasks",
        context_length=200000,
        max_output_tokens=4096,
    ),
]

CUSTOM_PLACEHOLDER_MODEL = ModelDescriptor(
    id="custom-model",
    display_name="Custom Model",
    description="Custom provider model",
    context_length=4096,
    max_output_tokens=4096,
)

OLLAMA_CONTEXT_LENGTH = 4096
GROK_DEFAULT_CONTEXT_LENGTH = 8192


class ProbeHTTPError(Exception):
    """A probe request got a non-2xx response."""

    def __init__(self, status_code: int, reason: str):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code}: {reason}")


def _check_status(response: httpx.Response) -> None:
    if not 200 <= response.status_code < 300:
        raise ProbeHTTPError(response.status_code, response.reason_phrase)


def _base_url(record: ProviderRecord) -> str:
    """The record's endpoint, falling back to its catalog default."""
    endpoint = record.endpoint
    if not endpoint:
        template = get_template(record.kind)
        endpoint = template.endpoint if template else None
    return (endpoint or "").rstrip("/")


def _credential_missing(record: ProviderRecord) -> ProbeResult:
    return ProbeResult.failed(
        "API key required",
        f"{kind_label(record.kind)} API key is required for connection testing",
    )


class ConnectionProber:
    """
    Connectivity check for every provider kind.

    ``probe()`` never raises: missing credentials, transport errors, HTTP
    errors and malformed payloads all come back as a failed ``ProbeResult``.
    Each call makes at most one request.
    """

    def __init__(self, timeout: float = 30.0):
        self.timeout = timeout
        self._probes: dict[ProviderKind, Callable[[ProviderRecord], Awaitable[ProbeResult]]] = {
            ProviderKind.GEMINI: self._probe_gemini,
            ProviderKind.GROQ: self._probe_groq,
            ProviderKind.ANTHROPIC: self._probe_anthropic,
            ProviderKind.GROK: self._probe_grok,
            ProviderKind.OLLAMA: self._probe_ollama,
            ProviderKind.CUSTOM: self._probe_custom,
        }

    async def probe(self, record: ProviderRecord) -> ProbeResult:
        """Test one provider."""
        probe = self._probes.get(record.kind)
        if probe is None:
            return ProbeResult.failed(
                "Unsupported provider type",
                f"Provider type {record.kind} is not supported",
            )

        label = kind_label(record.kind)
        try:
            result = await probe(record)
        except Exception as e:
            logger.warning("%s probe for %s failed: %s", label, record.id, e)
            return ProbeResult.failed(f"{label} connection failed", str(e) or type(e).__name__)

        if result.success:
            logger.debug("%s probe for %s succeeded", label, record.id)
        else:
            logger.debug("%s probe for %s not attempted: %s", label, record.id, result.error)
        return result

    async def _get_json(self, url: str, headers: dict[str, str] | None = None) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(url, headers=headers)
        _check_status(response)
        return response.json()

    # ------------------------------------------------------------------
    # Per-kind probes
    # ------------------------------------------------------------------

    async def _probe_gemini(self, record: ProviderRecord) -> ProbeResult:
        # The Gemini model list is fixed; nothing to ask the network.
        return ProbeResult(
            success=True,
            message="Gemini connection successful",
            models=[GEMINI_DEFAULT_MODEL.model_copy()],
        )

    async def _probe_groq(self, record: ProviderRecord) -> ProbeResult:
        if not record.credential:
            return _credential_missing(record)

        data = await self._get_json(
            f"{_base_url(record)}/models",
            headers={
                "Authorization": f"Bearer {record.credential}",
                "Content-Type": "application/json",
            },
        )
        models = [
            ModelDescriptor(
                id=item["id"],
                display_name=item["id"],
                description=f"Context length: {item.get('context_length') or 'Unknown'}",
                context_length=item.get("context_length"),
                max_output_tokens=item.get("context_length"),
            )
            for item in data["data"]
        ]
        return ProbeResult(success=True, message="Groq connection successful", models=models)

    async def _probe_anthropic(self, record: ProviderRecord) -> ProbeResult:
        if not record.credential:
            return _credential_missing(record)

        # A one-token completion is the cheapest authenticated request.
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(
                f"{_base_url(record)}/messages",
                headers={
                    "x-api-key": record.credential,
                    "Content-Type": "application/json",
                    "anthropic-version": ANTHROPIC_VERSION,
                },
                json={
                    "model": ANTHROPIC_PROBE_MODEL,
                    "max_tokens": 1,
                    "messages": [{"role": "user", "content": "Hello"}],
                },
            )
        _check_status(response)

        return ProbeResult(
            success=True,
            message="Anthropic connection successful",
            models=[m.model_copy() for m in ANTHROPIC_MODELS],
        )

    async def _probe_grok(self, record: ProviderRecord) -> ProbeResult:
        if not record.credential:
            return _credential_missing(record)

        data = await self._get_json(
            f"{_base_url(record)}/models",
            headers={
                "Authorization": f"Bearer {record.credential}",
                "Content-Type": "application/json",
            },
        )
        models = []
        for item in data.get("data") or []:
            context_length = item.get("context_length") or GROK_DEFAULT_CONTEXT_LENGTH
            models.append(ModelDescriptor(
                id=item["id"],
                display_name=item["id"],
                description=f"Context length: {item.get('context_length') or 'Unknown'}",
                context_length=context_length,
                max_output_tokens=context_length,
            ))
        return ProbeResult(success=True, message="Grok connection successful", models=models)

    async def _probe_ollama(self, record: ProviderRecord) -> ProbeResult:
        base_url = (record.endpoint or OLLAMA_DEFAULT_ENDPOINT).rstrip("/")
        data = await self._get_json(f"{base_url}/api/tags")

        models = []
        for item in data["models"]:
            size = item.get("size")
            models.append(ModelDescriptor(
                id=item["name"],
                display_name=item["name"],
                description=f"Size: {size / 1e9:.1f}GB" if size else "Size: Unknown",
                context_length=OLLAMA_CONTEXT_LENGTH,
                max_output_tokens=OLLAMA_CONTEXT_LENGTH,
            ))
        return ProbeResult(success=True, message="Ollama connection successful", models=models)

    async def _probe_custom(self, record: ProviderRecord) -> ProbeResult:
        if not record.endpoint:
            return ProbeResult.failed(
                "Base URL required",
                "Custom provider requires a base URL for connection testing",
            )

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(
                record.endpoint, headers={"Content-Type": "application/json"}
            )
        _check_status(response)

        # The endpoint's real catalog is unknown; offer a single placeholder.
        return ProbeResult(
            success=True,
            message="Custom provider connection successful",
            models=[CUSTOM_PLACEHOLDER_MODEL.model_copy()],
        )


def needs_credential(record: ProviderRecord) -> bool:
    """True when the record cannot be probed until a credential is set."""
    return requires_credential(record.kind) and not record.credential
