"""Built-in provider catalog.

Pure data module defining the predefined provider kinds and the defaults a
fresh registry is seeded with.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dailybrief.providers.models import ModelDescriptor, ProviderKind

GEMINI_DEFAULT_MODEL = ModelDescriptor(
    id="gemini-2.5-flash",
    display_name="Gemini 2.5 Flash",
    description="Fast and efficient model for general tasks",
    context_length=1048576,
    max_output_tokens=8192,
)

OLLAMA_DEFAULT_ENDPOINT = "http://localhost:11434"

# Kinds whose credential can be set through the registry.
CREDENTIAL_KINDS = frozenset(
    {ProviderKind.GROQ, ProviderKind.GEMINI, ProviderKind.ANTHROPIC, ProviderKind.GROK}
)

# Kinds whose connection test cannot run without a credential.
CREDENTIAL_REQUIRED_KINDS = frozenset(
    {ProviderKind.GROQ, ProviderKind.ANTHROPIC, ProviderKind.GROK}
)

_KIND_LABELS = {
    ProviderKind.GEMINI: "Gemini",
    ProviderKind.GROQ: "Groq",
    ProviderKind.ANTHROPIC: "Anthropic",
    ProviderKind.GROK: "Grok",
    ProviderKind.OLLAMA: "Ollama",
    ProviderKind.CUSTOM: "Custom provider",
}


@dataclass(frozen=True, slots=True)
class ProviderTemplate:
    """Default configuration for one predefined provider kind."""

    kind: ProviderKind
    display_name: str
    endpoint: str | None = None
    is_active: bool = False
    credential: str | None = None
    selected_model: str | None = None
    models: tuple[ModelDescriptor, ...] = field(default_factory=tuple)


_DEFAULTS: tuple[ProviderTemplate, ...] = (
    ProviderTemplate(
        kind=ProviderKind.GEMINI,
        display_name="Google Gemini",
        is_active=True,
        models=(GEMINI_DEFAULT_MODEL,),
        selected_model=GEMINI_DEFAULT_MODEL.id,
    ),
    ProviderTemplate(
        kind=ProviderKind.GROQ,
        display_name="Groq",
        endpoint="https://api.groq.com/openai/v1",
        credential="",
    ),
    ProviderTemplate(
        kind=ProviderKind.ANTHROPIC,
        display_name="Anthropic Claude",
        endpoint="https://api.anthropic.com/v1",
        credential="",
    ),
    ProviderTemplate(
        kind=ProviderKind.GROK,
        display_name="Grok",
        endpoint="https://api.grok.com/v1",
        credential="",
    ),
    ProviderTemplate(
        kind=ProviderKind.OLLAMA,
        display_name="Ollama (Local)",
        endpoint=OLLAMA_DEFAULT_ENDPOINT,
    ),
)


def defaults() -> list[ProviderTemplate]:
    """Return the predefined provider templates in seeding order."""
    return list(_DEFAULTS)


def get_template(kind: ProviderKind | str) -> ProviderTemplate | None:
    """Look up the template for a predefined kind.

    Args:
        kind: A ``ProviderKind`` or its string value.

    Returns:
        The matching ``ProviderTemplate``, or ``None`` for ``custom`` and
        unknown kinds.
    """
    for template in _DEFAULTS:
        if template.kind == kind:
            return template
    return None


def is_predefined(kind: ProviderKind) -> bool:
    return kind != ProviderKind.CUSTOM


def supports_credential(kind: ProviderKind) -> bool:
    return kind in CREDENTIAL_KINDS


def requires_credential(kind: ProviderKind) -> bool:
    return kind in CREDENTIAL_REQUIRED_KINDS


def kind_label(kind: ProviderKind) -> str:
    """Human-readable label used in probe messages."""
    return _KIND_LABELS[kind]
