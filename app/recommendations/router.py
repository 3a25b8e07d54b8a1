from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.llm.deps import get_recommendation_service
from app.core.metrics import record_recommendation_outcome
from app.domain.exceptions import BusinessValidationError, RecommendationError
from app.recommendations.errors import (
    INVALID_JSON_MESSAGE,
    SERVICE_UNAVAILABLE_MESSAGE,
    classify_error,
)
from app.recommendations.schemas import ErrorOut, RecommendationOut, RecommendationRequest
from app.recommendations.service import RecommendationService
from app.recommendations.validation import validate_recommendation_request

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])
logger = logging.getLogger("app.recommendations")


@router.post(
    "",
    response_model=RecommendationOut,
    responses={
        400: {"model": ErrorOut, "description": "Invalid JSON or failed input validation."},
        429: {"model": ErrorOut, "description": "Upstream rate limit reached."},
        500: {"model": ErrorOut, "description": "Recommendation generation failed."},
        503: {"model": ErrorOut, "description": "No recommendation text was produced."},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": RecommendationRequest.model_json_schema()}
            },
        }
    },
)
async def create_recommendations(
    request: Request,
    service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationOut | JSONResponse:
    """
    Generate lawn-care recommendations for a profile and current conditions.

    The body is parsed and validated here rather than by FastAPI so that every failure
    is answered with the `{"error": ...}` shape and the documented status codes.
    Generated text is not stored.
    """

    raw_body = await request.body()
    try:
        body = json.loads(raw_body)
    except ValueError:
        raise BusinessValidationError(INVALID_JSON_MESSAGE) from None

    profile, conditions = validate_recommendation_request(body)
    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")

    try:
        recommendations = await service.generate_recommendation(profile, conditions)
    except RecommendationError:
        raise
    except Exception as exc:  # noqa: BLE001 - anything unclassified becomes UnknownError
        raise classify_error(exc) from exc

    if not recommendations:
        logger.warning(
            "Recommendation service returned no text",
            extra={"request_id": request_id, "outcome": "unavailable", "success": False},
        )
        record_recommendation_outcome(request, "unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": SERVICE_UNAVAILABLE_MESSAGE},
        )

    logger.info(
        "Recommendations generated",
        extra={"request_id": request_id, "outcome": "success", "success": True},
    )
    record_recommendation_outcome(request, "success")
    return RecommendationOut(recommendations=recommendations)
