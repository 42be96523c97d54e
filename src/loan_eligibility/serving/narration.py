"""Hand-off of the plain-text summary to a narration surface.

The engine only produces text. A Narrator decides how (or whether) it is
spoken or displayed, and its failures never affect the eligibility result.
"""

from __future__ import annotations

import asyncio
from typing import Protocol

import structlog

from loan_eligibility.config.settings import NarrationSettings

logger = structlog.get_logger()


class Narrator(Protocol):
    def speak(self, text: str, voice: NarrationSettings) -> None: ...


class LoggingNarrator:
    """Default narrator: emits the summary as a structured log event."""

    def speak(self, text: str, voice: NarrationSettings) -> None:
        logger.info(
            "narration_delivered",
            text=text,
            lang=voice.lang,
            rate=voice.rate,
            pitch=voice.pitch,
        )


class RecordingNarrator:
    """Keeps every narrated summary in memory. Useful for tests and demos."""

    def __init__(self):
        self.spoken: list[str] = []

    def speak(self, text: str, voice: NarrationSettings) -> None:
        self.spoken.append(text)


async def narrate_after_delay(
    narrator: Narrator,
    text: str,
    voice: NarrationSettings,
    delay_seconds: float = 0.0,
):
    """Wait, then pass the summary to the narrator. Never raises."""
    if delay_seconds > 0:
        await asyncio.sleep(delay_seconds)
    try:
        narrator.speak(text, voice)
    except Exception:
        logger.exception("narration_failed", narrator=type(narrator).__name__)
