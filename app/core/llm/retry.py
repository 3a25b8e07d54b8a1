from __future__ import annotations

import asyncio
import logging

from app.core.llm.anthropic_client import AnthropicNetworkError, CompletionClient

logger = logging.getLogger("app.llm.retry")


class RetryingCompletionClient:
    """
    Wrap a completion client with a bounded retry on network failures.

    Only `AnthropicNetworkError` is retried. Upstream error bodies (auth, rate limit,
    invalid request) and malformed success bodies are raised on the first attempt.
    """

    def __init__(
        self,
        *,
        inner: CompletionClient,
        max_retries: int,
        backoff_seconds: float = 0.25,
    ):
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self._inner = inner
        self._max_retries = max_retries
        self._backoff_seconds = backoff_seconds

    async def create_message(self, *, prompt: str) -> str:
        attempt = 0
        while True:
            try:
                return await self._inner.create_message(prompt=prompt)
            except AnthropicNetworkError:
                if attempt >= self._max_retries:
                    raise
                attempt += 1
                logger.info(
                    "Retrying completion request after network error",
                    extra={"attempt": attempt, "max_retries": self._max_retries},
                )
                if self._backoff_seconds > 0:
                    await asyncio.sleep(self._backoff_seconds * attempt)
