"""Eligibility API endpoints."""

from __future__ import annotations

import asyncio
import time
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Body, Request

from loan_eligibility.data.schemas import EligibilityResult
from loan_eligibility.serving.narration import narrate_after_delay
from loan_eligibility.serving.schemas import ErrorResponse, NarrationResponse

router = APIRouter(tags=["eligibility"])


def _record_outcome(req: Request, result: EligibilityResult, start: float):
    """Update the counters served by /metrics."""
    state = req.app.state
    state.request_count += 1
    state.total_latency_ms += (time.monotonic() - start) * 1000
    if result.eligible:
        state.eligible_count += 1
    else:
        state.ineligible_count += 1


@router.post(
    "/eligibility",
    response_model=EligibilityResult,
    responses={422: {"model": ErrorResponse}},
)
async def check_eligibility(
    req: Request,
    background_tasks: BackgroundTasks,
    applicant: dict[str, Any] = Body(...),
):
    """Evaluate a raw applicant record.

    The result is held back for the configured delay; the narrated summary
    is scheduled after the response with its own delay.
    """
    settings = req.app.state.settings
    start = time.monotonic()

    delay = settings.serving.result_delay_seconds
    if delay > 0:
        await asyncio.sleep(delay)

    result = req.app.state.engine.evaluate(applicant)

    if settings.narration.enabled:
        background_tasks.add_task(
            narrate_after_delay,
            req.app.state.narrator,
            result.summary,
            settings.narration,
            settings.serving.narration_delay_seconds,
        )

    _record_outcome(req, result, start)
    return result


@router.post(
    "/eligibility/summary",
    response_model=NarrationResponse,
    responses={422: {"model": ErrorResponse}},
)
async def eligibility_summary(req: Request, applicant: dict[str, Any] = Body(...)):
    """Return the narration payload for a client-side speech engine."""
    start = time.monotonic()
    result = req.app.state.engine.evaluate(applicant)
    _record_outcome(req, result, start)
    voice = req.app.state.settings.narration
    return NarrationResponse(
        text=result.summary,
        lang=voice.lang,
        rate=voice.rate,
        pitch=voice.pitch,
    )
