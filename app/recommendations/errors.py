"""Error classification and the boundary's error-to-response mapping.

Disclosure policy: only rate-limit errors are returned with the upstream message.
Every other classified failure is answered with a generic message; the specific
error kind goes to the logs only.
"""

from __future__ import annotations

from dataclasses import dataclass

from app.core.llm.anthropic_client import (
    AnthropicAPIError,
    AnthropicNetworkError,
    AnthropicResponseFormatError,
)
from app.domain.exceptions import (
    ErrorKind,
    MalformedResponseError,
    NetworkError,
    RecommendationError,
    UnknownError,
    UpstreamError,
)

RATE_LIMIT_ERROR_TYPE = "rate_limit_error"
_AUTH_ERROR_TYPES = {"authentication_error", "auth_error", "permission_error"}
_AUTH_STATUS_CODES = {401, 403}

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred"
GENERIC_ERROR_MESSAGE = "An error occurred while generating recommendations"
SERVICE_UNAVAILABLE_MESSAGE = "Recommendation service unavailable"
INVALID_JSON_MESSAGE = "Invalid JSON in request body"


def _kind_for_upstream(*, error_type: str, status_code: int | None) -> ErrorKind:
    if error_type == RATE_LIMIT_ERROR_TYPE:
        return ErrorKind.RATE_LIMIT
    if error_type in _AUTH_ERROR_TYPES or status_code in _AUTH_STATUS_CODES:
        return ErrorKind.AUTH
    return ErrorKind.UNKNOWN


def classify_error(exc: BaseException) -> RecommendationError:
    """Map any exception raised by the pipeline to a classified RecommendationError."""

    if isinstance(exc, RecommendationError):
        return exc
    if isinstance(exc, AnthropicAPIError):
        return UpstreamError(
            exc.message,
            error_type=exc.error_type,
            kind=_kind_for_upstream(error_type=exc.error_type, status_code=exc.status_code),
            status_code=exc.status_code,
        )
    if isinstance(exc, AnthropicNetworkError):
        return NetworkError(str(exc))
    if isinstance(exc, AnthropicResponseFormatError):
        return MalformedResponseError(str(exc))
    return UnknownError(UNEXPECTED_ERROR_MESSAGE)


@dataclass(frozen=True)
class ErrorResponse:
    status_code: int
    message: str
    # When set, the error's own message is returned and `message` is only a fallback.
    forward_message: bool = False


ERROR_RESPONSES: dict[ErrorKind, ErrorResponse] = {
    ErrorKind.VALIDATION: ErrorResponse(400, "Invalid request", forward_message=True),
    ErrorKind.RATE_LIMIT: ErrorResponse(429, "Too many requests", forward_message=True),
    ErrorKind.AUTH: ErrorResponse(500, GENERIC_ERROR_MESSAGE),
    ErrorKind.NETWORK: ErrorResponse(500, GENERIC_ERROR_MESSAGE),
    ErrorKind.MALFORMED_RESPONSE: ErrorResponse(500, GENERIC_ERROR_MESSAGE),
    ErrorKind.UNKNOWN: ErrorResponse(500, GENERIC_ERROR_MESSAGE),
}


def response_for_error(error: RecommendationError) -> tuple[int, dict[str, str]]:
    """Return the (status_code, body) pair the API answers with for a classified error."""

    mapped = ERROR_RESPONSES[error.kind]
    if mapped.forward_message and error.message:
        return mapped.status_code, {"error": error.message}
    return mapped.status_code, {"error": mapped.message}
