"""Fixtures for CLI tests."""

from unittest.mock import patch

import pytest

from dailybrief.config.schema import Config


@pytest.fixture
def cli_config(temp_dir):
    """Point every CLI module at a throwaway storage directory."""
    config = Config()
    config.storage.directory = str(temp_dir / "data")
    config.logging.console = False

    with (
        patch("dailybrief.cli.main.load_config", return_value=config),
        patch("dailybrief.cli.providers.load_config", return_value=config),
        patch("dailybrief.cli.interests.load_config", return_value=config),
    ):
        yield config
