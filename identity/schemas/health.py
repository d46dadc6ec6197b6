"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /health/."""

    status: Literal["ok"] = "ok"
    service: str = Field(default="identity", description="Service name")
    environment: str = Field(description="Current app environment (dev or prod)")
    database: Literal["connected", "disconnected"] = Field(
        description="Whether the user store answered a trivial query",
    )
