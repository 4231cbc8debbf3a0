"""In-memory provider registry with persisted-state reconciliation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from dailybrief.errors import (
    InvalidProviderConfigError,
    ModelNotFoundError,
    ProviderConnectionError,
    ProviderNotFoundError,
    UnsupportedOperationError,
)
from dailybrief.providers import catalog
from dailybrief.providers.models import ModelDescriptor, ProbeResult, ProviderKind, ProviderRecord
from dailybrief.providers.probes import ConnectionProber

if TYPE_CHECKING:
    from dailybrief.storage.providers import ProviderStore

logger = logging.getLogger(__name__)

# Fields the merge never leaves unset, falling back to the catalog default.
_REQUIRED_FIELDS = ("id", "models", "is_active", "is_connected")

# Fields callers may not change through update().
_IMMUTABLE_FIELDS = frozenset({"id", "kind"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_defaults() -> list[ProviderRecord]:
    """Seed records for every catalog template, with positional ids."""
    return [
        ProviderRecord(
            id=f"provider-{index + 1}",
            kind=template.kind,
            display_name=template.display_name,
            credential=template.credential,
            endpoint=template.endpoint,
            is_active=template.is_active,
            is_connected=template.kind == ProviderKind.GEMINI,
            models=[m.model_copy() for m in template.models],
            selected_model=template.selected_model,
        )
        for index, template in enumerate(catalog.defaults())
    ]


def _merge(default: ProviderRecord, stored: dict[str, Any]) -> ProviderRecord:
    """Overlay stored fields on a default record, keeping required fields set."""
    base = default.model_dump()
    merged = {**base, **stored, "kind": default.kind}
    for name in _REQUIRED_FIELDS:
        if merged.get(name) is None:
            merged[name] = base[name]
    if not merged["id"]:
        merged["id"] = base["id"]
    return ProviderRecord.model_validate(merged)


def _clear_dangling_selection(record: ProviderRecord) -> ProviderRecord:
    if record.selected_model and not record.has_model(record.selected_model):
        logger.debug(
            "Clearing selected model %s of provider %s: not in its model list",
            record.selected_model,
            record.id,
        )
        record.selected_model = None
    return record


class ProviderRegistry:
    """
    Authoritative list of configured providers.

    Every mutation is written through to the ``ProviderStore``. Concurrent
    coroutines touching the same provider are not serialized; the last
    write wins.
    """

    def __init__(
        self,
        store: ProviderStore,
        prober: ConnectionProber | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.prober = prober or ConnectionProber()
        self._clock = clock
        self._providers: list[ProviderRecord] = []
        self._last_issued_ms = 0
        self.load()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Rebuild the in-memory list from storage and the catalog."""
        stored = self.store.load()
        if not stored:
            self._providers = build_defaults()
            self._save()
            return
        self._providers, repaired = self._reconcile(stored)
        if repaired:
            self._save()

    def reload(self) -> None:
        """Re-run reconciliation, e.g. after another process changed storage."""
        self.load()

    def reset(self) -> None:
        """Forget stored providers and reseed from the catalog."""
        self.store.clear()
        self.load()

    def _reconcile(self, stored: list[dict[str, Any]]) -> tuple[list[ProviderRecord], bool]:
        """Merge stored mappings onto the catalog.

        Returns the providers and whether any id had to be reissued, in which
        case the caller persists the repaired list.
        """
        stored_ids = {s["id"] for s in stored if isinstance(s.get("id"), str) and s["id"]}
        providers: list[ProviderRecord] = []
        seen: set[str] = set()
        repaired = False
        for default in build_defaults():
            match = next((s for s in stored if s.get("kind") == default.kind.value), None)
            # A positional default id may already belong to another stored record,
            # e.g. when a kind was added to the catalog after the data was saved.
            taken = stored_ids
            record = default
            if match is not None:
                try:
                    record = _merge(default, match)
                    taken = set()
                except ValidationError as e:
                    logger.warning(
                        "Stored %s provider is invalid, using defaults: %s", default.kind.value, e
                    )
                    taken = stored_ids - {match.get("id")}
            if record.id in seen or record.id in taken:
                old_id = record.id
                record.id = self._next_id(taken=stored_ids | seen)
                repaired = True
                logger.warning(
                    "Provider id %s is already in use; %s provider now uses %s",
                    old_id,
                    default.kind.value,
                    record.id,
                )
            seen.add(record.id)
            providers.append(_clear_dangling_selection(record))

        # Custom providers have no catalog template, so carry them over as stored.
        for item in stored:
            if item.get("kind") != ProviderKind.CUSTOM.value:
                continue
            try:
                record = ProviderRecord.model_validate(item)
            except ValidationError as e:
                logger.warning("Dropping invalid stored custom provider: %s", e)
                continue
            if not record.endpoint or record.id in seen:
                logger.warning("Dropping stored custom provider %r", record.id)
                continue
            seen.add(record.id)
            providers.append(_clear_dangling_selection(record))
        return providers, repaired

    def _save(self) -> None:
        self.store.save(self._providers)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _find(self, provider_id: str) -> ProviderRecord:
        for provider in self._providers:
            if provider.id == provider_id:
                return provider
        raise ProviderNotFoundError(provider_id)

    def _next_id(self, taken: set[str] | None = None) -> str:
        stamp = int(self._clock().timestamp() * 1000)
        if taken is None:
            taken = {p.id for p in self._providers}
        stamp = max(stamp, self._last_issued_ms + 1)
        while f"provider-{stamp}" in taken:
            stamp += 1
        self._last_issued_ms = stamp
        return f"provider-{stamp}"

    async def list(self) -> list[ProviderRecord]:
        """Return copies of all providers, in registry order."""
        return [p.model_copy(deep=True) for p in self._providers]

    async def get(self, provider_id: str) -> ProviderRecord:
        return self._find(provider_id).model_copy(deep=True)

    async def active(self) -> ProviderRecord | None:
        """Return the active provider, or None if none is active."""
        for provider in self._providers:
            if provider.is_active:
                return provider.model_copy(deep=True)
        return None

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    async def add(
        self,
        kind: ProviderKind | str,
        display_name: str,
        endpoint: str | None = None,
        credential: str | None = None,
        is_active: bool = False,
        selected_model: str | None = None,
    ) -> ProviderRecord:
        """Register a user-defined provider."""
        try:
            kind = ProviderKind(kind)
        except ValueError as e:
            raise InvalidProviderConfigError(f"Unknown provider type {kind!r}") from e
        if catalog.is_predefined(kind):
            raise UnsupportedOperationError(
                f"Provider type {kind.value} is predefined and cannot be added"
            )
        if not endpoint or not endpoint.strip():
            raise InvalidProviderConfigError("Custom providers require a base URL")

        record = ProviderRecord(
            id=self._next_id(),
            kind=kind,
            display_name=display_name,
            endpoint=endpoint.strip(),
            credential=credential,
            is_active=is_active,
            selected_model=selected_model,
        )
        # A brand-new record has no models, so nothing can be selected yet.
        _clear_dangling_selection(record)
        self._providers.append(record)
        self._save()
        logger.info("Added provider %s (%s)", record.id, record.display_name)
        return record.model_copy(deep=True)

    async def update(self, provider_id: str, **fields: Any) -> ProviderRecord:
        """Shallow-merge ``fields`` onto a provider."""
        index = self._providers.index(self._find(provider_id))
        current = self._providers[index]

        unknown = set(fields) - set(ProviderRecord.model_fields)
        if unknown:
            raise InvalidProviderConfigError(f"Unknown provider fields: {', '.join(sorted(unknown))}")
        for name in _IMMUTABLE_FIELDS & set(fields):
            if fields[name] != getattr(current, name):
                raise UnsupportedOperationError(f"Provider field {name!r} cannot be changed")

        try:
            updated = ProviderRecord.model_validate({**current.model_dump(), **fields})
        except ValidationError as e:
            raise InvalidProviderConfigError(str(e)) from e
        if updated.kind == ProviderKind.CUSTOM and not updated.endpoint:
            raise InvalidProviderConfigError("Custom providers require a base URL")
        if updated.selected_model and not updated.has_model(updated.selected_model):
            raise ModelNotFoundError(provider_id, updated.selected_model)

        self._providers[index] = updated
        self._save()
        return updated.model_copy(deep=True)

    async def remove(self, provider_id: str) -> None:
        provider = self._find(provider_id)
        if catalog.is_predefined(provider.kind):
            raise UnsupportedOperationError(
                f"Predefined provider {provider.display_name} cannot be removed"
            )
        self._providers.remove(provider)
        self._save()
        logger.info("Removed provider %s", provider_id)

    async def set_active(self, provider_id: str) -> None:
        """Make ``provider_id`` the only active provider."""
        target = self._find(provider_id)
        for provider in self._providers:
            provider.is_active = False
        target.is_active = True
        self._save()

    # ------------------------------------------------------------------
    # Credentials & models
    # ------------------------------------------------------------------

    async def set_credential(self, provider_id: str, credential: str) -> None:
        provider = self._find(provider_id)
        if not catalog.supports_credential(provider.kind):
            raise UnsupportedOperationError(
                f"API key not supported for provider type {provider.kind.value}"
            )
        provider.credential = credential
        self._save()

    async def get_credential(self, provider_id: str) -> str | None:
        provider = self._find(provider_id)
        if not catalog.supports_credential(provider.kind):
            return None
        return provider.credential or None

    async def set_selected_model(self, provider_id: str, model_id: str) -> None:
        provider = self._find(provider_id)
        if not provider.has_model(model_id):
            raise ModelNotFoundError(provider_id, model_id)
        provider.selected_model = model_id
        self._save()

    async def get_available_models(self, provider_id: str) -> list[ModelDescriptor]:
        """
        Return the provider's models, probing the backend when none are cached.

        Raises:
            ProviderNotFoundError: Unknown provider id.
            ProviderConnectionError: The probe failed.
        """
        provider = self._find(provider_id)
        if provider.models:
            return [m.model_copy() for m in provider.models]

        result = await self.test_connection(provider_id)
        if result.success and result.models is not None:
            provider = self._find(provider_id)
            provider.models = [m.model_copy() for m in result.models]
            provider.last_tested_at = self._clock()
            self._save()
            return [m.model_copy() for m in provider.models]

        raise ProviderConnectionError(result.error or "Failed to fetch models")

    # ------------------------------------------------------------------
    # Connection testing
    # ------------------------------------------------------------------

    async def test_connection(self, provider_id: str) -> ProbeResult:
        """
        Probe a provider and record the outcome.

        Never raises for an unknown id; the failure comes back as a result
        like every other probe failure.
        """
        try:
            provider = self._find(provider_id)
        except ProviderNotFoundError as e:
            return ProbeResult.failed("Provider not found", str(e))

        result = await self.prober.probe(provider.model_copy(deep=True))

        # The record may have been replaced or removed while the probe ran.
        try:
            provider = self._find(provider_id)
        except ProviderNotFoundError:
            return result
        provider.is_connected = result.success
        if result.success:
            provider.last_tested_at = self._clock()
        self._save()
        return result
