"""Stable reason codes for declined applications."""

from __future__ import annotations

from dataclasses import dataclass

from loan_eligibility.decision.outcomes import RuleOutcome


@dataclass
class DeclineReason:
    code: str
    description: str
    label: str
    rule: str


# Rule -> (code, short label). The applicant-facing text comes from the rule itself.
REASON_CODE_MAP = {
    "age": ("EL001", "Applicant age outside accepted range"),
    "credit_score": ("EL002", "Insufficient credit score"),
    "income": ("EL003", "Insufficient monthly income"),
    "debt_ratio": ("EL004", "High debt-to-income ratio"),
    "employment": ("EL005", "Insufficient length of employment"),
    "max_loan": ("EL006", "Requested amount relative to income"),
}


class ReasonCodeGenerator:
    """Attach reason codes to failed rule outcomes, preserving their order."""

    def generate_reasons(self, violations: list[RuleOutcome]) -> list[DeclineReason]:
        reasons = []
        for outcome in violations:
            if outcome.passed or outcome.rule not in REASON_CODE_MAP:
                continue
            code, label = REASON_CODE_MAP[outcome.rule]
            reasons.append(DeclineReason(
                code=code,
                description=outcome.message,
                label=label,
                rule=outcome.rule,
            ))
        return reasons

    def format_for_notice(self, reasons: list[DeclineReason]) -> list[dict]:
        return [
            {"code": r.code, "reason": r.description, "label": r.label}
            for r in reasons
        ]
