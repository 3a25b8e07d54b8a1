from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure categories surfaced by the recommendation pipeline."""

    VALIDATION = "ValidationError"
    AUTH = "AuthError"
    RATE_LIMIT = "RateLimitError"
    NETWORK = "NetworkError"
    MALFORMED_RESPONSE = "MalformedResponseError"
    UNKNOWN = "UnknownError"


class ConfigurationError(Exception):
    """Raised when a service is constructed with an unusable configuration."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RecommendationError(Exception):
    """
    Base class for classified pipeline failures.

    `type` mirrors the upstream error type string when one exists (e.g.
    "rate_limit_error"); otherwise it is the ErrorKind value.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, *, error_type: str | None = None):
        super().__init__(message)
        self.message = message
        self.type = error_type or self.kind.value


class BusinessValidationError(RecommendationError):
    """Raised when request input violates a presence or range rule."""

    kind = ErrorKind.VALIDATION


class UpstreamError(RecommendationError):
    """Raised when the completion endpoint answered with a structured error body."""

    def __init__(
        self,
        message: str,
        *,
        error_type: str,
        kind: ErrorKind = ErrorKind.UNKNOWN,
        status_code: int | None = None,
    ):
        super().__init__(message, error_type=error_type)
        self.kind = kind
        self.status_code = status_code


class NetworkError(RecommendationError):
    kind = ErrorKind.NETWORK


class MalformedResponseError(RecommendationError):
    kind = ErrorKind.MALFORMED_RESPONSE


class UnknownError(RecommendationError):
    kind = ErrorKind.UNKNOWN
