"""User preferences and saved interests."""

import json
import logging
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from dailybrief.errors import StorageError
from dailybrief.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "daily-briefing-preferences"
INTERESTS_KEY = "daily-briefing-interests"


class UserPreferences(BaseModel):
    """Briefing preferences."""

    interests: list[str] = Field(default_factory=list)
    summary_length: Literal["short", "medium", "detailed"] = "medium"
    export_format: Literal["markdown", "json"] = "markdown"


class PreferencesStore:
    """Reads and writes preferences and interests through a key-value store."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def _get_json(self, key: str, default: Any) -> Any:
        try:
            raw = self.kv.get(key)
            return json.loads(raw) if raw else default
        except (StorageError, OSError, json.JSONDecodeError) as e:
            logger.warning("Error reading key %r: %s", key, e)
            return default

    def _set_json(self, key: str, value: Any) -> None:
        try:
            self.kv.set(key, json.dumps(value))
        except (StorageError, OSError) as e:
            logger.error("Error writing key %r: %s", key, e)

    # --- Preferences ---

    def get_preferences(self) -> UserPreferences:
        data = self._get_json(PREFERENCES_KEY, {})
        try:
            return UserPreferences.model_validate(data)
        except ValidationError as e:
            logger.warning("Stored preferences are invalid, using defaults: %s", e)
            return UserPreferences()

    def set_preferences(self, **changes: Any) -> UserPreferences:
        """Merge ``changes`` into the stored preferences and return the result."""
        current = self.get_preferences().model_dump()
        current.update(changes)
        updated = UserPreferences.model_validate(current)
        self._set_json(PREFERENCES_KEY, updated.model_dump())
        return updated

    # --- Interests ---

    def get_interests(self) -> list[str]:
        data = self._get_json(INTERESTS_KEY, [])
        if not isinstance(data, list):
            return []
        return [str(item) for item in data]

    def set_interests(self, interests: list[str]) -> None:
        self._set_json(INTERESTS_KEY, list(interests))
        # Preferences carry a copy of the interests too.
        self.set_preferences(interests=list(interests))

    def add_interest(self, interest: str) -> bool:
        """Add ``interest`` unless already present. Returns True if added."""
        current = self.get_interests()
        if interest in current:
            return False
        self.set_interests([*current, interest])
        return True

    def remove_interest(self, interest: str) -> bool:
        """Remove ``interest``. Returns True if it was present."""
        current = self.get_interests()
        if interest not in current:
            return False
        self.set_interests([i for i in current if i != interest])
        return True

    # --- Utilities ---

    def clear_all(self) -> None:
        for key in (PREFERENCES_KEY, INTERESTS_KEY):
            try:
                self.kv.remove(key)
            except (StorageError, OSError) as e:
                logger.error("Error clearing key %r: %s", key, e)

    def export_data(self) -> UserPreferences:
        return self.get_preferences()

    def import_data(self, data: UserPreferences) -> None:
        self._set_json(PREFERENCES_KEY, data.model_dump())
        self._set_json(INTERESTS_KEY, list(data.interests))
