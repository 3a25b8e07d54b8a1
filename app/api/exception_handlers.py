from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.metrics import record_recommendation_outcome
from app.domain.exceptions import ErrorKind, RecommendationError
from app.recommendations.errors import response_for_error

logger = logging.getLogger("app.recommendations")


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""

    @app.exception_handler(RecommendationError)
    async def handle_recommendation_error(
        request: Request,
        exc: RecommendationError,
    ) -> JSONResponse:
        status_code, body = response_for_error(exc)
        # IMPORTANT: do not log request bodies or upstream messages (may echo the prompt).
        request_id = getattr(request.state, "request_id", None) or request.headers.get(
            "X-Request-ID"
        )
        level = logging.INFO if exc.kind is ErrorKind.VALIDATION else logging.WARNING
        logger.log(
            level,
            "Recommendation request failed",
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "request_path": request.url.path,  # no query string
                "status_code": status_code,
                "error_kind": exc.kind.value,
                "error_type": exc.type,
                "success": False,
            },
        )
        record_recommendation_outcome(request, exc.kind.value, error_kind=exc.kind.value)
        return JSONResponse(status_code=status_code, content=body)
