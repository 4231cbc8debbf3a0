"""Local persistence."""

from dailybrief.storage.kv import FileKeyValueStore, KeyValueStore, MemoryKeyValueStore
from dailybrief.storage.preferences import PreferencesStore, UserPreferences
from dailybrief.storage.providers import ProviderStore

__all__ = [
    "FileKeyValueStore",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "PreferencesStore",
    "ProviderStore",
    "UserPreferences",
]
