"""Composition root: builds the objects CLI commands work with."""

from dailybrief.config import Config
from dailybrief.providers.gateway import ProviderGateway
from dailybrief.storage.kv import FileKeyValueStore
from dailybrief.storage.preferences import PreferencesStore
from dailybrief.storage.providers import ProviderStore


def open_gateway(config: Config) -> ProviderGateway:
    """Load the provider gateway from the configured storage directory."""
    store = ProviderStore(FileKeyValueStore(config.storage.path))
    return ProviderGateway.from_store(store, timeout=config.probe.timeout)


def open_preferences(config: Config) -> PreferencesStore:
    return PreferencesStore(FileKeyValueStore(config.storage.path))
