"""Request validation for the recommendations endpoint.

Checks run in a fixed order so that a request violating several rules always gets
the same single message: presence before ranges, profile before conditions.
"""

from __future__ import annotations

import math
from typing import Any

from app.domain.exceptions import BusinessValidationError
from app.recommendations.schemas import Conditions, LawnProfile

MISSING_TOP_LEVEL_MESSAGE = "Missing required fields: profile and conditions"
MISSING_PROFILE_FIELDS_MESSAGE = "Missing required profile fields"
MISSING_CONDITIONS_FIELDS_MESSAGE = "Missing required conditions fields"
INVALID_SIZE_MESSAGE = "Invalid lawn size"
INVALID_CONDITIONS_MESSAGE = "Invalid temperature or humidity values"

REQUIRED_PROFILE_FIELDS = ("size", "grassType", "sunExposure", "location")
REQUIRED_CONDITIONS_FIELDS = ("temperature", "humidity", "weather")
_TEXT_FIELDS = {"grassType", "sunExposure", "location", "weather"}


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is not a measurement.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _missing_fields(data: dict[str, Any], required: tuple[str, ...]) -> list[str]:
    missing: list[str] = []
    for field in required:
        if field not in data:
            missing.append(field)
        elif field in _TEXT_FIELDS and not _is_text(data[field]):
            # Numeric nulls fall through to the range checks; text has no other rule.
            missing.append(field)
    return missing


def _check_ranges(*, size: Any, temperature: Any, humidity: Any) -> None:
    if not _is_number(size) or size <= 0:
        raise BusinessValidationError(INVALID_SIZE_MESSAGE)
    if not _is_number(temperature) or not _is_number(humidity) or not 0 <= humidity <= 100:
        raise BusinessValidationError(INVALID_CONDITIONS_MESSAGE)


def check_value_ranges(profile: LawnProfile, conditions: Conditions) -> None:
    """Apply the lawn size and humidity rules to already-typed inputs."""

    _check_ranges(
        size=profile.size,
        temperature=conditions.temperature,
        humidity=conditions.humidity,
    )


def validate_recommendation_request(body: Any) -> tuple[LawnProfile, Conditions]:
    """
    Validate a decoded JSON request body and return typed inputs.

    Raises BusinessValidationError with the first violated rule's message.
    """

    profile = body.get("profile") if isinstance(body, dict) else None
    conditions = body.get("conditions") if isinstance(body, dict) else None
    if not isinstance(profile, dict) or not isinstance(conditions, dict):
        raise BusinessValidationError(MISSING_TOP_LEVEL_MESSAGE)

    missing_profile = _missing_fields(profile, REQUIRED_PROFILE_FIELDS)
    if missing_profile:
        raise BusinessValidationError(
            f"{MISSING_PROFILE_FIELDS_MESSAGE}: {', '.join(missing_profile)}"
        )

    missing_conditions = _missing_fields(conditions, REQUIRED_CONDITIONS_FIELDS)
    if missing_conditions:
        raise BusinessValidationError(
            f"{MISSING_CONDITIONS_FIELDS_MESSAGE}: {', '.join(missing_conditions)}"
        )

    # Type checks happen here, on the raw values, so that e.g. a numeric string
    # is rejected instead of being coerced by the model.
    _check_ranges(
        size=profile["size"],
        temperature=conditions["temperature"],
        humidity=conditions["humidity"],
    )

    typed_profile = LawnProfile.model_validate(
        {field: profile[field] for field in REQUIRED_PROFILE_FIELDS}
    )
    typed_conditions = Conditions.model_validate(
        {field: conditions[field] for field in REQUIRED_CONDITIONS_FIELDS}
    )
    return typed_profile, typed_conditions
