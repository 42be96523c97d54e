"""FastAPI application factory."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI

from loan_eligibility.config.settings import Settings, load_settings
from loan_eligibility.decision.engine import EligibilityEngine
from loan_eligibility.serving.middleware import setup_middleware
from loan_eligibility.serving.narration import LoggingNarrator, Narrator
from loan_eligibility.serving.routes import eligibility, monitoring
from loan_eligibility.utils.logging import setup_logging


def create_app(settings: Settings | None = None, narrator: Narrator | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Set up the engine, narrator and counters on startup."""
        setup_logging(app.state.settings.log_level, json_output=app.state.settings.json_logs)
        app.state.start_time = time.monotonic()
        app.state.request_count = 0
        app.state.total_latency_ms = 0.0
        app.state.eligible_count = 0
        app.state.ineligible_count = 0
        app.state.validation_error_count = 0
        app.state.engine = EligibilityEngine()
        app.state.narrator = narrator or LoggingNarrator()
        yield

    app = FastAPI(
        title="Loan Eligibility API",
        description="Rule-based loan eligibility with sizing and narrated explanations",
        version="1.0.0",
        lifespan=lifespan,
    )
    # Auth middleware reads the API key from here, so it must exist before startup.
    app.state.settings = settings or load_settings()

    setup_middleware(app)
    app.include_router(eligibility.router, prefix="/api/v1")
    app.include_router(monitoring.router, prefix="/api/v1")

    return app
