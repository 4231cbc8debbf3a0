"""Pytest fixtures for dailybrief tests."""

import logging
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from dailybrief.storage.kv import MemoryKeyValueStore
from dailybrief.storage.providers import ProviderStore

FIXED_NOW = datetime(2025, 1, 31, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def store(kv: MemoryKeyValueStore) -> ProviderStore:
    return ProviderStore(kv)


@pytest.fixture
def clock():
    """A clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """CLI runs reconfigure the package logger; undo that between tests."""
    logger = logging.getLogger("dailybrief")
    yield
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
