from __future__ import annotations

import asyncio

import pytest

from app.core.llm.anthropic_client import AnthropicAPIError, AnthropicNetworkError
from app.core.llm.retry import RetryingCompletionClient


class _ScriptedClient:
    """Raise the scripted errors in order, then return `text`."""

    def __init__(self, *, errors: list[BaseException], text: str = "ok"):
        self._errors = list(errors)
        self._text = text
        self.calls = 0

    async def create_message(self, *, prompt: str) -> str:
        self.calls += 1
        if self._errors:
            raise self._errors.pop(0)
        return self._text


def _run(client: RetryingCompletionClient) -> str:
    return asyncio.run(client.create_message(prompt="p"))


def test_retries_network_errors_until_success() -> None:
    inner = _ScriptedClient(errors=[AnthropicNetworkError("Network error")] * 2)
    client = RetryingCompletionClient(inner=inner, max_retries=2, backoff_seconds=0)

    assert _run(client) == "ok"
    assert inner.calls == 3


def test_gives_up_after_max_retries() -> None:
    inner = _ScriptedClient(errors=[AnthropicNetworkError("Network error")] * 3)
    client = RetryingCompletionClient(inner=inner, max_retries=1, backoff_seconds=0)

    with pytest.raises(AnthropicNetworkError):
        _run(client)
    assert inner.calls == 2


def test_does_not_retry_upstream_errors() -> None:
    error = AnthropicAPIError(error_type="rate_limit_error", message="slow down", status_code=429)
    inner = _ScriptedClient(errors=[error])
    client = RetryingCompletionClient(inner=inner, max_retries=3, backoff_seconds=0)

    with pytest.raises(AnthropicAPIError):
        _run(client)
    assert inner.calls == 1


def test_negative_max_retries_is_rejected() -> None:
    with pytest.raises(ValueError):
        RetryingCompletionClient(inner=_ScriptedClient(errors=[]), max_retries=-1)
