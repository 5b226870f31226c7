from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(description="Health status")


class ConfigResponse(BaseModel):
    targets: list[str] = Field(description="Targets being checked, in launch order")
    delay_s: float = Field(ge=0, description="Fixed delay between checks of one target")
    timeout_s: float | None = Field(default=None)
    connect_timeout_s: float | None = Field(default=None)
    max_in_flight: int = Field(ge=0, description="0 means unbounded")
