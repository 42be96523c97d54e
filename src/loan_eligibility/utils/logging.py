"""Structured logging setup."""

from __future__ import annotations

import logging
from typing import IO, Optional

import structlog


def setup_logging(level: str = "INFO", json_output: bool = True, stream: Optional[IO[str]] = None):
    """Configure structlog for the API and the command-line tools.

    json_output=True: one JSON object per line (server).
    json_output=False: colored console output (development).
    stream: where log lines go; stdout when omitted. The CLI passes stderr so
    that its own stdout stays machine-readable.
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_output:
        processors.append(structlog.processors.format_exc_info)
        # Keep the rupee sign readable in reasons and summaries
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
    )
