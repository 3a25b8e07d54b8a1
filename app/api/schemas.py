from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Liveness response; does not reflect whether the model API key is configured."""

    status: str = Field(
        description="Always `ok` when the process is serving requests.",
        examples=["ok"],
    )
