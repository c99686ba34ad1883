"""
Unit tests for the generation service adapters (SDK clients mocked).
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from pitchroom.agents.base import ClaudeClient, GenerationServiceError, OpenAIClient


class _StatusError(Exception):
    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


def _openai_with(create):
    client = OpenAIClient(api_key="sk-test", model="gpt-4o")
    sdk = MagicMock()
    sdk.chat.completions.create = create
    client._client = sdk
    return client


class TestOpenAIClient:
    """Tests for OpenAIClient."""

    @pytest.mark.asyncio
    async def test_messages_and_json_mode(self):
        response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="{}"))])
        create = AsyncMock(return_value=response)
        client = _openai_with(create)

        text = await client.generate(
            "system",
            "user",
            history=[{"role": "user", "content": "earlier"}, {"role": "assistant", "content": "reply"}],
            json_mode=True,
        )

        assert text == "{}"
        kwargs = create.call_args.kwargs
        assert [m["role"] for m in kwargs["messages"]] == ["system", "user", "assistant", "user"]
        assert kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_errors_wrapped_with_status(self):
        client = _openai_with(AsyncMock(side_effect=_StatusError("Service Unavailable", 503)))

        with pytest.raises(GenerationServiceError) as exc_info:
            await client.generate("system", "user")

        assert exc_info.value.status == 503
        assert str(exc_info.value) == "HTTP 503: Service Unavailable"

    @pytest.mark.asyncio
    async def test_no_choices_is_empty(self):
        client = _openai_with(AsyncMock(return_value=SimpleNamespace(choices=[])))
        assert await client.generate("system", "user") == ""


class TestClaudeClient:
    """Tests for ClaudeClient."""

    @pytest.mark.asyncio
    async def test_text_blocks_joined(self):
        response = SimpleNamespace(content=[
            SimpleNamespace(type="text", text="Hello "),
            SimpleNamespace(type="tool_use", text="ignored"),
            SimpleNamespace(type="text", text="world"),
        ])
        client = ClaudeClient(api_key="a-test", model="claude-3-5-haiku-20241022")
        sdk = MagicMock()
        sdk.messages.create = AsyncMock(return_value=response)
        client._client = sdk

        text = await client.generate("system", "user", json_mode=True)

        assert text == "Hello world"
        kwargs = sdk.messages.create.call_args.kwargs
        assert "valid JSON only" in kwargs["system"]
        assert kwargs["max_tokens"] == 4096

    @pytest.mark.asyncio
    async def test_errors_wrapped(self):
        client = ClaudeClient(api_key="a-test", model="claude-3-5-haiku-20241022")
        sdk = MagicMock()
        sdk.messages.create = AsyncMock(side_effect=_StatusError("overloaded", 529))
        client._client = sdk

        with pytest.raises(GenerationServiceError) as exc_info:
            await client.generate("system", "user")

        assert exc_info.value.status == 529
