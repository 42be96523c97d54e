"""API middleware: API-key check, per-request log context, error mapping."""

from __future__ import annotations

import hmac
import time
import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from loan_eligibility.errors import ValidationError

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class AuthMiddleware(BaseHTTPMiddleware):
    """Reject eligibility and metrics calls without the configured X-API-Key."""

    EXEMPT_PATHS = {"/api/v1/health", "/docs", "/openapi.json", "/redoc"}

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        supplied = request.headers.get("X-API-Key", "")
        expected = request.app.state.settings.serving.api_key
        if not hmac.compare_digest(supplied.encode(), expected.encode()):
            logger.warning("api_key_rejected", path=request.url.path)
            return JSONResponse(
                status_code=401,
                content={"detail": "Invalid or missing API key"},
            )

        return await call_next(request)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id to every log line emitted while serving a request.

    The id is taken from X-Request-ID when the caller sends one and is echoed
    back on the response.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.monotonic()
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "request_completed",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            latency_ms=round((time.monotonic() - start) * 1000, 2),
        )
        return response


async def validation_error_handler(request: Request, exc: ValidationError):
    """Incomplete applicant records are client errors, not rejections."""
    request.app.state.validation_error_count += 1
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "field": exc.field},
    )


def setup_middleware(app: FastAPI):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    # Added last so it runs first and the auth rejection is logged with the id.
    app.add_middleware(AuthMiddleware)
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(ValidationError, validation_error_handler)
