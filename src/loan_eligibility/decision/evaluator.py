"""Scored eligibility rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from loan_eligibility.data.schemas import ApplicantRecord
from loan_eligibility.decision.outcomes import RuleOutcome
from loan_eligibility.decision.sizing import estimate_emi


@dataclass
class RuleEvaluation:
    outcomes: list[RuleOutcome] = field(default_factory=list)
    estimated_emi: float = 0.0
    debt_ratio: Optional[float] = None

    @property
    def passed(self) -> bool:
        return all(o.passed for o in self.outcomes)

    @property
    def points(self) -> int:
        return sum(o.points for o in self.outcomes if o.passed)

    @property
    def violations(self) -> list[RuleOutcome]:
        return [o for o in self.outcomes if not o.passed]


class EligibilityEvaluator:
    """Apply the five scored rules to a validated applicant.

    Every rule runs regardless of earlier failures so that all violations
    are reported. Rules, in order:
        - age within [21, 65]: 15 points
        - credit score >= 750: 30 points, >= 650: 20 points
        - monthly income >= 25,000: 20 points
        - debt ratio <= 50%: 20 points
        - employment >= 3 years: 15 points, >= 1 year: 10 points
    """

    MIN_AGE = 21
    MAX_AGE = 65
    EXCELLENT_CREDIT = 750
    MIN_CREDIT = 650
    MIN_MONTHLY_INCOME = 25000
    MAX_DEBT_RATIO = 0.5
    STABLE_EMPLOYMENT_YEARS = 3
    MIN_EMPLOYMENT_YEARS = 1

    def evaluate(self, applicant: ApplicantRecord) -> RuleEvaluation:
        emi = estimate_emi(applicant.loan_amount)
        ratio = self.debt_ratio(applicant.existing_loans, emi, applicant.monthly_income)

        return RuleEvaluation(
            outcomes=[
                self._check_age(applicant.age),
                self._check_credit(applicant.credit_score),
                self._check_income(applicant.monthly_income),
                self._check_debt_ratio(ratio),
                self._check_employment(applicant.employment_years),
            ],
            estimated_emi=emi,
            debt_ratio=ratio,
        )

    @staticmethod
    def debt_ratio(existing_loans: float, emi: float, monthly_income: float) -> Optional[float]:
        """Monthly obligations over income. None when there is no income."""
        if monthly_income <= 0:
            return None
        return (existing_loans + emi) / monthly_income

    def _check_age(self, age: int) -> RuleOutcome:
        if self.MIN_AGE <= age <= self.MAX_AGE:
            return RuleOutcome("age", True, 15, "Age within range")
        return RuleOutcome(
            "age", False, 0, f"Age must be between {self.MIN_AGE} and {self.MAX_AGE} years"
        )

    def _check_credit(self, credit_score: int) -> RuleOutcome:
        if credit_score >= self.EXCELLENT_CREDIT:
            return RuleOutcome("credit_score", True, 30, "Excellent credit score")
        if credit_score >= self.MIN_CREDIT:
            return RuleOutcome("credit_score", True, 20, "Good credit score")
        return RuleOutcome("credit_score", False, 0, f"Credit score below {self.MIN_CREDIT}")

    def _check_income(self, monthly_income: float) -> RuleOutcome:
        if monthly_income >= self.MIN_MONTHLY_INCOME:
            return RuleOutcome("income", True, 20, "Income sufficient")
        return RuleOutcome("income", False, 0, f"Income below ₹{self.MIN_MONTHLY_INCOME:,}")

    def _check_debt_ratio(self, ratio: Optional[float]) -> RuleOutcome:
        # No income means any obligation is unaffordable.
        if ratio is not None and ratio <= self.MAX_DEBT_RATIO:
            return RuleOutcome("debt_ratio", True, 20, "Debt ratio acceptable")
        return RuleOutcome(
            "debt_ratio", False, 0, f"Debt ratio exceeds {self.MAX_DEBT_RATIO:.0%}"
        )

    def _check_employment(self, years: float) -> RuleOutcome:
        if years >= self.STABLE_EMPLOYMENT_YEARS:
            return RuleOutcome("employment", True, 15, "Stable employment")
        if years >= self.MIN_EMPLOYMENT_YEARS:
            return RuleOutcome("employment", True, 10, "Employment meets minimum")
        return RuleOutcome(
            "employment", False, 0, f"Need {self.MIN_EMPLOYMENT_YEARS}+ year employment"
        )
