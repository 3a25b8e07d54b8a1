from __future__ import annotations

from app.recommendations.schemas import Conditions, LawnProfile


def _format_number(value: int | float) -> str:
    # 5000.0 and 1e3 read as whole numbers; 72.5 stays as is.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_recommendation_prompt(*, profile: LawnProfile, conditions: Conditions) -> str:
    """
    Render the user prompt for recommendation generation.

    The output is a pure function of its inputs (no timestamps, no randomness) so the
    same request always produces byte-identical prompt text.
    """

    return "\n".join(
        [
            "As a lawn care expert, provide recommendations for this lawn:",
            "",
            "Lawn Profile:",
            f"- Size: {_format_number(profile.size)} sq ft",
            f"- Grass Type: {profile.grass_type}",
            f"- Sun Exposure: {profile.sun_exposure}",
            f"- Location: {profile.location}",
            "",
            "Current Conditions:",
            f"- Temperature: {_format_number(conditions.temperature)}°F",
            f"- Humidity: {_format_number(conditions.humidity)}%",
            f"- Weather: {conditions.weather}",
            "",
            "Please provide specific recommendations for:",
            "1. Immediate care based on current conditions",
            "2. Maintenance tasks that should be performed",
            "3. Weather-related adjustments to normal care routines",
        ]
    )
