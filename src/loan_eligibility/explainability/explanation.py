"""Final result assembly and the narrated summary."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from loan_eligibility.data.schemas import ApplicantRecord, EligibilityResult
from loan_eligibility.decision.evaluator import RuleEvaluation
from loan_eligibility.decision.outcomes import RuleOutcome
from loan_eligibility.decision.sizing import LoanSizing
from loan_eligibility.explainability.reason_codes import ReasonCodeGenerator

# Shown for every approved application instead of the per-rule pass details.
APPROVAL_REASONS = ("All criteria met", "Good credit", "Stable income", "Employment verified")

NEXT_STEPS = (
    "Next steps: Submit documents, verification within 24 to 48 hours, "
    "final approval, then funds disbursed."
)
REMEDIATION = (
    "You can try lowering requested amount, improving credit score, "
    "or reducing existing monthly loans and reapply."
)


def to_percent(fraction: float) -> Optional[float]:
    """Percentage with one decimal digit, halves rounded away from zero.

    Rounds the exact binary value, so 0.1225 reads as 12.3. None if the
    percentage is not a finite number.
    """
    percent = fraction * 100
    if not math.isfinite(percent):
        return None
    with localcontext() as ctx:
        # Enough digits for any finite double
        ctx.prec = 400
        return float(Decimal(percent).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ExplanationBuilder:
    """Assemble the EligibilityResult and its plain-text summary.

    The summary is a pure string meant for a display or speech engine;
    nothing here depends on how it is rendered.
    """

    def __init__(self, reason_codes: ReasonCodeGenerator | None = None):
        self.reason_codes = reason_codes or ReasonCodeGenerator()

    def build(
        self,
        applicant: ApplicantRecord,
        evaluation: RuleEvaluation,
        sizing: LoanSizing,
        ceiling: RuleOutcome,
    ) -> EligibilityResult:
        violations = evaluation.violations
        if not ceiling.passed:
            violations.append(ceiling)
        eligible = not violations

        if eligible:
            reasons = list(APPROVAL_REASONS)
            reason_codes = []
        else:
            reasons = [v.message for v in violations]
            reason_codes = self.reason_codes.format_for_notice(
                self.reason_codes.generate_reasons(violations)
            )

        ratio = None
        if evaluation.debt_ratio is not None:
            ratio = to_percent(evaluation.debt_ratio)

        result = EligibilityResult(
            eligible=eligible,
            score=evaluation.points if eligible else 0,
            reasons=reasons,
            max_loan=sizing.max_loan,
            emi=sizing.emi,
            ratio=ratio,
            reason_codes=reason_codes,
        )
        return result.model_copy(update={"summary": self.summarize(result, applicant.name)})

    @staticmethod
    def summarize(result: EligibilityResult, name: str | None = None) -> str:
        parts = [
            f"{name or 'Applicant'}, here are your loan eligibility details.",
            f"Eligibility: {'Approved' if result.eligible else 'Not eligible'}.",
        ]
        if result.eligible:
            parts.append(f"Score: {result.score} out of 100.")
            parts.append(f"Maximum eligible loan amount is rupees {result.max_loan:,}.")
            parts.append(f"Estimated monthly EMI (approx) is rupees {result.emi:,}.")
            if result.ratio is not None:
                parts.append(f"Debt ratio is {result.ratio:.1f} percent.")
            parts.append(NEXT_STEPS)
        else:
            parts.append("Reasons for ineligibility:")
            for i, reason in enumerate(result.reasons, start=1):
                parts.append(f"{i}. {reason}.")
            parts.append(REMEDIATION)
        return " ".join(parts)
