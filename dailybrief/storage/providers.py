"""Persistence of the provider list as one JSON document."""

import json
import logging
from collections.abc import Iterable
from typing import Any

from dailybrief.errors import StorageError
from dailybrief.providers.models import ProviderRecord
from dailybrief.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

PROVIDERS_KEY = "daily-briefing-providers"


class ProviderStore:
    """
    Loads and saves provider records under a single namespaced key.

    Both directions fail soft: a broken or missing payload loads as an empty
    list and a failed write is logged, leaving the in-memory list as the only
    copy until the next successful save.
    """

    def __init__(self, kv: KeyValueStore, key: str = PROVIDERS_KEY):
        self.kv = kv
        self.key = key

    def load(self) -> list[dict[str, Any]]:
        """Return the persisted provider mappings, or ``[]`` if unusable."""
        try:
            raw = self.kv.get(self.key)
        except (StorageError, OSError) as e:
            logger.warning("Failed to load providers from storage: %s", e)
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Stored providers are not valid JSON, using defaults: %s", e)
            return []

        if not isinstance(data, list):
            logger.warning("Stored providers are not a list, using defaults")
            return []

        records = [item for item in data if isinstance(item, dict)]
        if len(records) != len(data):
            logger.warning("Skipped %d malformed stored provider entries", len(data) - len(records))
        return records

    def save(self, records: Iterable[ProviderRecord]) -> None:
        """Write the full provider list."""
        payload = json.dumps([r.model_dump(mode="json") for r in records])
        try:
            self.kv.set(self.key, payload)
        except (StorageError, OSError) as e:
            logger.error("Failed to save providers to storage: %s", e)

    def clear(self) -> None:
        try:
            self.kv.remove(self.key)
        except (StorageError, OSError) as e:
            logger.error("Failed to clear stored providers: %s", e)
