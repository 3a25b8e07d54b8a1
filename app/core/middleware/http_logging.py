"""HTTP logging middleware.

- Log *metadata only*: no request/response bodies (they carry the user's location and
  model output), no query strings, no headers.
- Generate or propagate X-Request-ID for correlation.
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

logger = logging.getLogger("app.http")

_REQUEST_ID_HEADER = "X-Request-ID"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]{0,127}$")


def _get_or_create_request_id(*, request: Request) -> str:
    """Return the caller's X-Request-ID when it is safe to log, else a new UUID4 hex."""

    candidate = request.headers.get(_REQUEST_ID_HEADER)
    if candidate and _SAFE_REQUEST_ID_PATTERN.fullmatch(candidate):
        return candidate
    return uuid.uuid4().hex


def _route_template(*, request: Request) -> str:
    route = request.scope.get("route")
    path = getattr(route, "path", None)
    if isinstance(path, str) and path:
        return path
    return "unmatched"


class HttpLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log one line per request and attach X-Request-ID to every response.

    The line carries the recommendation outcome and error kind when the route recorded
    them, and is emitted at WARNING for 5xx responses.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _get_or_create_request_id(request=request)
        started = time.perf_counter()
        # Handlers and exception handlers read this for their own log lines.
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception:  # noqa: BLE001 - logged with stack trace, then re-raised
            duration_ms = (time.perf_counter() - started) * 1000.0
            logger.exception(
                "Unhandled exception while processing request",
                extra={
                    "request_id": request_id,
                    "http_method": request.method,
                    "request_path": _route_template(request=request),
                    "status_code": 500,
                    "duration_ms": round(duration_ms, 2),
                },
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000.0
        response.headers[_REQUEST_ID_HEADER] = request_id

        extra: dict[str, object] = {
            "request_id": request_id,
            "http_method": request.method,
            "request_path": _route_template(request=request),
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }
        # Set by the recommendations route and its exception handler.
        for field in ("outcome", "error_kind"):
            value = getattr(request.state, field, None)
            if value is not None:
                extra[field] = value

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(level, "Request completed", extra=extra)
        return response
