"""Tests for the providers CLI commands."""

import json
from unittest.mock import AsyncMock, patch

from typer.testing import CliRunner

from dailybrief.cli.main import app
from dailybrief.providers.models import ModelDescriptor, ProbeResult

runner = CliRunner()


def _stored_providers(config) -> list[dict]:
    path = config.storage.path / "daily-briefing-providers.json"
    return json.loads(path.read_text())


class TestProvidersHelp:
    def test_help(self):
        result = runner.invoke(app, ["providers", "--help"])
        assert result.exit_code == 0
        assert "Manage AI providers" in result.output


class TestList:
    def test_lists_defaults_and_persists_seed(self, cli_config):
        result = runner.invoke(app, ["providers", "list"])

        assert result.exit_code == 0
        assert "Gemini" in result.output
        assert "Groq" in result.output
        assert "Ollama" in result.output
        assert len(_stored_providers(cli_config)) == 5


class TestAddRemove:
    def test_add_custom_provider(self, cli_config):
        result = runner.invoke(
            app, ["providers", "add", "LM Studio", "http://localhost:1234/v1", "--key", "lm"]
        )

        assert result.exit_code == 0
        assert "Added LM Studio" in result.output
        stored = _stored_providers(cli_config)
        assert stored[-1]["display_name"] == "LM Studio"
        assert stored[-1]["credential"] == "lm"
        assert stored[-1]["kind"] == "custom"

    def test_remove_custom_provider(self, cli_config):
        runner.invoke(app, ["providers", "add", "Tmp", "https://e.com"])
        provider_id = _stored_providers(cli_config)[-1]["id"]

        result = runner.invoke(app, ["providers", "remove", provider_id])

        assert result.exit_code == 0
        assert len(_stored_providers(cli_config)) == 5

    def test_remove_predefined_fails(self, cli_config):
        result = runner.invoke(app, ["providers", "remove", "provider-1"])

        assert result.exit_code == 1
        assert "cannot be removed" in result.output

    def test_remove_unknown_fails(self, cli_config):
        result = runner.invoke(app, ["providers", "remove", "provider-404"])

        assert result.exit_code == 1
        assert "Provider with id provider-404 not found" in result.output


class TestActivate:
    def test_single_active(self, cli_config):
        result = runner.invoke(app, ["providers", "activate", "provider-2"])

        assert result.exit_code == 0
        active = [p["id"] for p in _stored_providers(cli_config) if p["is_active"]]
        assert active == ["provider-2"]


class TestSetKey:
    def test_set_key_argument(self, cli_config):
        result = runner.invoke(app, ["providers", "set-key", "provider-2", "sk-groq"])

        assert result.exit_code == 0
        assert _stored_providers(cli_config)[1]["credential"] == "sk-groq"

    def test_set_key_prompted(self, cli_config):
        result = runner.invoke(app, ["providers", "set-key", "provider-3"], input="sk-ant\n")

        assert result.exit_code == 0
        assert _stored_providers(cli_config)[2]["credential"] == "sk-ant"

    def test_set_key_unsupported_kind(self, cli_config):
        result = runner.invoke(app, ["providers", "set-key", "provider-5", "nope"])

        assert result.exit_code == 1
        assert "API key not supported for provider type ollama" in result.output

    def test_blank_key_rejected(self, cli_config):
        result = runner.invoke(app, ["providers", "set-key", "provider-2", "   "])
        assert result.exit_code == 1


class TestTestCommand:
    def test_gemini_succeeds_offline(self, cli_config):
        result = runner.invoke(app, ["providers", "test", "provider-1"])

        assert result.exit_code == 0
        assert "Gemini connection successful" in result.output

    def test_missing_key_fails(self, cli_config):
        result = runner.invoke(app, ["providers", "test", "provider-2"])

        assert result.exit_code == 1
        assert "API key required" in result.output
        assert _stored_providers(cli_config)[1]["is_connected"] is False

    def test_unknown_provider(self, cli_config):
        result = runner.invoke(app, ["providers", "test", "nope"])

        assert result.exit_code == 1
        assert "Provider not found" in result.output


class TestModels:
    def test_lists_cached_models(self, cli_config):
        result = runner.invoke(app, ["providers", "models", "provider-1"])

        assert result.exit_code == 0
        assert "gemini-2.5-flash" in result.output

    def test_fetches_then_selects(self, cli_config):
        probe = AsyncMock(return_value=ProbeResult(
            success=True,
            message="Ollama connection successful",
            models=[ModelDescriptor(id="llama3", display_name="llama3", description="Size: 4.7GB")],
        ))

        with patch("dailybrief.providers.probes.ConnectionProber.probe", probe):
            result = runner.invoke(app, ["providers", "models", "provider-5"])

        assert result.exit_code == 0
        assert "llama3" in result.output

        result = runner.invoke(app, ["providers", "select-model", "provider-5", "llama3"])
        assert result.exit_code == 0
        assert _stored_providers(cli_config)[4]["selected_model"] == "llama3"

    def test_fetch_failure(self, cli_config):
        result = runner.invoke(app, ["providers", "models", "provider-2"])

        assert result.exit_code == 1
        assert "Groq API key is required" in result.output

    def test_select_unknown_model(self, cli_config):
        result = runner.invoke(app, ["providers", "select-model", "provider-1", "nope"])

        assert result.exit_code == 1
        assert "Model nope not found in provider provider-1" in result.output


class TestReset:
    def test_reset_with_yes(self, cli_config):
        runner.invoke(app, ["providers", "set-key", "provider-2", "sk-groq"])

        result = runner.invoke(app, ["providers", "reset", "--yes"])

        assert result.exit_code == 0
        assert _stored_providers(cli_config)[1]["credential"] == ""

    def test_reset_declined(self, cli_config):
        runner.invoke(app, ["providers", "set-key", "provider-2", "sk-groq"])

        result = runner.invoke(app, ["providers", "reset"], input="n\n")

        assert result.exit_code == 1
        assert _stored_providers(cli_config)[1]["credential"] == "sk-groq"
