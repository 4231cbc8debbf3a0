"""Single entry point to provider management."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from dailybrief.providers.models import ModelDescriptor, ProbeResult, ProviderKind, ProviderRecord
from dailybrief.providers.probes import ConnectionProber
from dailybrief.providers.registry import ProviderRegistry

if TYPE_CHECKING:
    from dailybrief.storage.providers import ProviderStore


class ProviderGateway:
    """
    Facade over the provider registry and its connection probes.

    UI code and the briefing pipeline depend on this class only. It holds no
    state of its own; every call is forwarded to the registry.
    """

    def __init__(self, registry: ProviderRegistry):
        self.registry = registry

    @classmethod
    def from_store(cls, store: ProviderStore, timeout: float = 30.0) -> ProviderGateway:
        """Build a gateway, loading providers from ``store``."""
        return cls(ProviderRegistry(store, prober=ConnectionProber(timeout=timeout)))

    # --- Providers ---

    async def list_providers(self) -> list[ProviderRecord]:
        return await self.registry.list()

    async def get_provider(self, provider_id: str) -> ProviderRecord:
        return await self.registry.get(provider_id)

    async def active_provider(self) -> ProviderRecord | None:
        return await self.registry.active()

    async def add_provider(
        self,
        display_name: str,
        endpoint: str,
        credential: str | None = None,
        kind: ProviderKind | str = ProviderKind.CUSTOM,
        is_active: bool = False,
        selected_model: str | None = None,
    ) -> ProviderRecord:
        return await self.registry.add(
            kind,
            display_name,
            endpoint=endpoint,
            credential=credential,
            is_active=is_active,
            selected_model=selected_model,
        )

    async def update_provider(self, provider_id: str, **fields: Any) -> ProviderRecord:
        return await self.registry.update(provider_id, **fields)

    async def remove_provider(self, provider_id: str) -> None:
        await self.registry.remove(provider_id)

    async def set_active_provider(self, provider_id: str) -> None:
        await self.registry.set_active(provider_id)

    def reload(self) -> None:
        self.registry.reload()

    def reset(self) -> None:
        self.registry.reset()

    # --- Credentials ---

    async def set_credential(self, provider_id: str, credential: str) -> None:
        await self.registry.set_credential(provider_id, credential)

    async def get_credential(self, provider_id: str) -> str | None:
        return await self.registry.get_credential(provider_id)

    # --- Models ---

    async def get_available_models(self, provider_id: str) -> list[ModelDescriptor]:
        return await self.registry.get_available_models(provider_id)

    async def set_selected_model(self, provider_id: str, model_id: str) -> None:
        await self.registry.set_selected_model(provider_id, model_id)

    # --- Connection testing ---

    async def test_connection(self, provider_id: str) -> ProbeResult:
        return await self.registry.test_connection(provider_id)
