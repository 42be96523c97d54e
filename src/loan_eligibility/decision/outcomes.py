from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RuleOutcome:
    """Result of one eligibility check. Pass messages stay internal."""

    rule: str
    passed: bool
    points: int
    message: str
