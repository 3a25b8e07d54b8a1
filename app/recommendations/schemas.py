from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LawnProfile(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    size: int | float = Field(description="Lawn size in square feet (> 0).", examples=[5000])
    grass_type: str = Field(alias="grassType", examples=["Kentucky Bluegrass"])
    sun_exposure: str = Field(alias="sunExposure", examples=["Full Sun"])
    location: str = Field(description="Free-form location (e.g. ZIP code).", examples=["12345"])


class Conditions(BaseModel):
    model_config = ConfigDict(frozen=True)

    temperature: int | float = Field(description="Air temperature in degrees F.", examples=[85])
    humidity: int | float = Field(description="Relative humidity in percent (0-100).", examples=[60])
    weather: str = Field(description="Short weather description.", examples=["Sunny"])


class RecommendationRequest(BaseModel):
    """Documented request shape. The route validates the raw body itself (see validation.py)."""

    profile: LawnProfile
    conditions: Conditions


class RecommendationOut(BaseModel):
    recommendations: str = Field(
        description="Free-form recommendation text produced by the model.",
        examples=["Water deeply in the early morning due to high temperatures."],
    )


class ErrorOut(BaseModel):
    error: str = Field(
        description="Human-readable error message. Upstream details are not exposed.",
        examples=["Invalid lawn size"],
    )
