"""Tests for the Anthropic generation backend."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import anthropic
import httpx
import pytest

from dailybrief.backends.anthropic import AnthropicBackend, _sdk_base_url

# ---------------------------------------------------------------------------
# Helpers for building fake Anthropic SDK response objects
# ---------------------------------------------------------------------------


def _text_block(text: str) -> SimpleNamespace:
    return SimpleNamespace(type="text", text=text)


def _usage(input_tokens: int, output_tokens: int) -> SimpleNamespace:
    return SimpleNamespace(input_tokens=input_tokens, output_tokens=output_tokens)


def _anthropic_response(
    content: list[SimpleNamespace],
    stop_reason: str = "end_turn",
    usage: SimpleNamespace | None = None,
) -> SimpleNamespace:
    return SimpleNamespace(content=content, stop_reason=stop_reason, usage=usage)


def _status_error(status_code: int, message: str) -> anthropic.APIStatusError:
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    response = httpx.Response(status_code, request=request)
    return anthropic.APIStatusError(message, response=response, body=None)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_client() -> AsyncMock:
    """Return an ``AsyncMock`` that stands in for ``AsyncAnthropic``."""
    client = AsyncMock()
    client.messages = AsyncMock()
    client.messages.create = AsyncMock()
    return client


@pytest.fixture
def backend(mock_client) -> AnthropicBackend:
    with patch(
        "dailybrief.backends.anthropic.anthropic.AsyncAnthropic", return_value=mock_client
    ):
        return AnthropicBackend(api_key="sk-ant", default_model="claude-3-haiku-20240307")


class TestInit:
    def test_client_arguments(self):
        with patch("dailybrief.backends.anthropic.anthropic.AsyncAnthropic") as client_class:
            AnthropicBackend(api_key="sk-ant", api_base="https://proxy.example.com/v1/", timeout=9)

        kwargs = client_class.call_args[1]
        assert kwargs["api_key"] == "sk-ant"
        assert kwargs["base_url"] == "https://proxy.example.com"
        assert kwargs["timeout"] == 9

    def test_default_base_url(self):
        with patch("dailybrief.backends.anthropic.anthropic.AsyncAnthropic") as client_class:
            AnthropicBackend(api_key="sk-ant")

        assert client_class.call_args[1]["base_url"] == AnthropicBackend.DEFAULT_BASE_URL

    @pytest.mark.parametrize(
        ("api_base", "expected"),
        [
            (None, None),
            ("", None),
            ("https://api.anthropic.com/v1", "https://api.anthropic.com"),
            ("https://api.anthropic.com", "https://api.anthropic.com"),
        ],
    )
    def test_sdk_base_url(self, api_base, expected):
        assert _sdk_base_url(api_base) == expected


class TestGenerate:
    async def test_text_response(self, backend, mock_client):
        mock_client.messages.create.return_value = _anthropic_response(
            [_text_block("Top story"), _text_block("More")], usage=_usage(10, 20)
        )

        response = await backend.generate("Summarize", max_tokens=300, temperature=0.2)

        assert response.content == "Top story\n\nMore"
        assert response.finish_reason == "end_turn"
        assert response.usage == {
            "prompt_tokens": 10, "completion_tokens": 20, "total_tokens": 30,
        }

        kwargs = mock_client.messages.create.call_args[1]
        assert kwargs["model"] == "claude-3-haiku-20240307"
        assert kwargs["max_tokens"] == 300
        assert kwargs["temperature"] == 0.2
        assert kwargs["messages"] == [{"role": "user", "content": "Summarize"}]

    async def test_empty_content(self, backend, mock_client):
        mock_client.messages.create.return_value = _anthropic_response([], stop_reason=None)

        response = await backend.generate("hi")

        assert response.content is None
        assert response.finish_reason == "stop"
        assert response.usage == {}

    async def test_api_status_error(self, backend, mock_client):
        mock_client.messages.create.side_effect = _status_error(529, "overloaded")

        response = await backend.generate("hi")

        assert response.is_error
        assert response.content == "API error (529): overloaded"

    async def test_unexpected_error(self, backend, mock_client):
        mock_client.messages.create.side_effect = RuntimeError("socket closed")

        response = await backend.generate("hi")

        assert response.is_error
        assert response.content == "Request failed: socket closed"

    def test_default_model(self, backend):
        assert backend.get_default_model() == "claude-3-haiku-20240307"
