"""API request and response schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class NarrationResponse(BaseModel):
    text: str
    lang: str
    rate: float
    pitch: float


class ErrorResponse(BaseModel):
    detail: str
    field: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    narration_enabled: bool
    uptime_seconds: float
    version: str


class MetricsResponse(BaseModel):
    total_requests: int
    eligible_count: int
    ineligible_count: int
    validation_error_count: int
    avg_latency_ms: float
    approval_rate: float
