"""Health and metrics API endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter, Request

from loan_eligibility.serving.schemas import HealthResponse, MetricsResponse

router = APIRouter(tags=["monitoring"])


@router.get("/health", response_model=HealthResponse)
async def health_check(req: Request):
    """Check system health."""
    uptime = time.monotonic() - req.app.state.start_time

    return HealthResponse(
        status="healthy" if req.app.state.engine is not None else "unhealthy",
        narration_enabled=req.app.state.settings.narration.enabled,
        uptime_seconds=round(uptime, 2),
        version="1.0.0",
    )


@router.get("/metrics", response_model=MetricsResponse)
async def get_metrics(req: Request):
    """Return evaluation counts and latency."""
    total = req.app.state.request_count
    total_latency = req.app.state.total_latency_ms

    return MetricsResponse(
        total_requests=total,
        eligible_count=req.app.state.eligible_count,
        ineligible_count=req.app.state.ineligible_count,
        validation_error_count=req.app.state.validation_error_count,
        avg_latency_ms=round(total_latency / max(total, 1), 2),
        approval_rate=round(req.app.state.eligible_count / max(total, 1), 4),
    )
