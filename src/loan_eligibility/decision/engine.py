"""Eligibility pipeline: validate, evaluate rules, size the loan, explain."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from loan_eligibility.data.schemas import ApplicantRecord, EligibilityResult
from loan_eligibility.data.validation import ApplicantValidator
from loan_eligibility.decision.evaluator import EligibilityEvaluator
from loan_eligibility.decision.sizing import LoanSizer
from loan_eligibility.errors import ValidationError
from loan_eligibility.explainability.explanation import ExplanationBuilder

logger = structlog.get_logger()


class EligibilityEngine:
    """Combine validator, rule evaluator, loan sizer and explanation builder.

    Stateless: one applicant record in, one EligibilityResult out. Safe to
    share between concurrent requests.
    """

    def __init__(
        self,
        validator: ApplicantValidator | None = None,
        evaluator: EligibilityEvaluator | None = None,
        sizer: LoanSizer | None = None,
        explainer: ExplanationBuilder | None = None,
    ):
        self.validator = validator or ApplicantValidator()
        self.evaluator = evaluator or EligibilityEvaluator()
        self.sizer = sizer or LoanSizer()
        self.explainer = explainer or ExplanationBuilder()

    def evaluate(self, raw: Mapping[str, Any]) -> EligibilityResult:
        """Validate a raw field-keyed record and evaluate it.

        Raises ValidationError (MissingFieldError / InvalidFieldError) before
        any rule runs if the record is incomplete.
        """
        try:
            applicant = self.validator.validate(raw)
        except ValidationError as e:
            logger.warning(
                "applicant_validation_failed",
                error=type(e).__name__,
                field=e.field,
                detail=e.detail,
            )
            raise
        return self.evaluate_record(applicant)

    def evaluate_record(self, applicant: ApplicantRecord) -> EligibilityResult:
        evaluation = self.evaluator.evaluate(applicant)
        for outcome in evaluation.outcomes:
            logger.debug(
                "rule_evaluated",
                rule=outcome.rule,
                passed=outcome.passed,
                points=outcome.points,
                message=outcome.message,
            )

        sizing = self.sizer.size(applicant)
        ceiling = self.sizer.check_ceiling(applicant, sizing)
        result = self.explainer.build(applicant, evaluation, sizing, ceiling)

        logger.info(
            "eligibility_evaluated",
            eligible=result.eligible,
            score=result.score,
            max_loan=result.max_loan,
            reason_count=len(result.reasons) if not result.eligible else 0,
        )
        return result


# Default engine shared by module-level callers
_engine = EligibilityEngine()


def evaluate(raw: Mapping[str, Any]) -> EligibilityResult:
    """Evaluate a raw applicant record with the default engine."""
    return _engine.evaluate(raw)
