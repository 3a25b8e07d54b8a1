from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

import httpx

DEFAULT_BASE_URL = "https://api.anthropic.com/v1"
DEFAULT_API_VERSION = "2023-06-01"

# Fixed generation parameters; callers only choose the model.
MAX_TOKENS = 1024
TEMPERATURE = 0.7

NETWORK_ERROR_MESSAGE = "Network error"
INVALID_FORMAT_MESSAGE = "Invalid response format"
UNKNOWN_ERROR_TYPE = "UnknownError"
UNKNOWN_ERROR_MESSAGE = "Unknown error occurred"


class AnthropicError(Exception):
    """Base error for Anthropic client failures."""


class AnthropicNetworkError(AnthropicError):
    """Raised on transport failures and on bodies that cannot be parsed as JSON."""


class AnthropicAPIError(AnthropicError):
    """Raised when the API answers with a non-success status and a JSON body."""

    def __init__(self, *, error_type: str, message: str, status_code: int):
        super().__init__(message)
        self.error_type = error_type
        self.message = message
        self.status_code = status_code


class AnthropicResponseFormatError(AnthropicError):
    """Raised when a success response does not carry text at content[0].text."""


class CompletionClient(Protocol):
    async def create_message(self, *, prompt: str) -> str: ...


@dataclass(frozen=True)
class AnthropicConfig:
    api_key: str
    model: str
    base_url: str = DEFAULT_BASE_URL
    api_version: str = DEFAULT_API_VERSION
    timeout_seconds: float = 30.0


class AnthropicClient:
    """
    Minimal client for the Anthropic Messages API.

    Design notes:
    - No logging in this module (prompts include the user's location).
    - Exactly one HTTP request per call; retry policy belongs to callers.
    - Credentials travel in headers only, never in the request body.
    """

    def __init__(self, *, config: AnthropicConfig):
        self._config = config

    @property
    def model(self) -> str:
        return self._config.model

    def build_payload(self, *, prompt: str) -> dict[str, Any]:
        return {
            "model": self._config.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": MAX_TOKENS,
            "temperature": TEMPERATURE,
        }

    def build_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-api-key": self._config.api_key,
            "anthropic-version": self._config.api_version,
        }

    async def create_message(self, *, prompt: str) -> str:
        url = f"{self._config.base_url.rstrip('/')}/messages"

        try:
            async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
                resp = await client.post(
                    url, headers=self.build_headers(), json=self.build_payload(prompt=prompt)
                )
        except httpx.HTTPError as exc:
            raise AnthropicNetworkError(NETWORK_ERROR_MESSAGE) from exc

        try:
            data = resp.json()
        except ValueError as exc:
            # Unparsable bodies are reported like transport failures, even on 2xx.
            raise AnthropicNetworkError(NETWORK_ERROR_MESSAGE) from exc

        return self._interpret_response(status_code=resp.status_code, data=data)

    @staticmethod
    def _interpret_response(*, status_code: int, data: Any) -> str:
        if not 200 <= status_code < 300:
            error = data.get("error") if isinstance(data, dict) else None
            if not isinstance(error, dict):
                error = {}
            raise AnthropicAPIError(
                error_type=error.get("type") or UNKNOWN_ERROR_TYPE,
                message=error.get("message") or UNKNOWN_ERROR_MESSAGE,
                status_code=status_code,
            )

        try:
            text = data["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise AnthropicResponseFormatError(INVALID_FORMAT_MESSAGE) from exc

        if not isinstance(text, str) or not text:
            raise AnthropicResponseFormatError(INVALID_FORMAT_MESSAGE)
        return text
