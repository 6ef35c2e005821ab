"""Engine health model."""

from __future__ import annotations

from pydantic import BaseModel, Field


class EngineHealth(BaseModel):
    """Health status of a search engine."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of last health check in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of last health check")
    channels: dict[str, bool] = Field(default_factory=dict, description="Per-channel ping result")
    message: str | None = Field(default=None, description="Additional health message")
