"""Loan ceiling and installment estimates."""

from __future__ import annotations

import math
from dataclasses import dataclass

from loan_eligibility.data.schemas import ApplicantRecord
from loan_eligibility.decision.outcomes import RuleOutcome
from loan_eligibility.errors import InvalidFieldError

# Flat yearly rate for the simplified (non-amortized) installment estimate.
FLAT_INTEREST_RATE = 0.01
MONTHS_PER_YEAR = 12


def estimate_emi(loan_amount: float) -> float:
    """Unfloored monthly installment: 1% of principal spread over 12 months."""
    return (loan_amount * FLAT_INTEREST_RATE) / MONTHS_PER_YEAR


@dataclass(frozen=True)
class LoanSizing:
    ceiling: float
    max_loan: int
    emi: int


class LoanSizer:
    """Income-derived affordability ceiling.

    Assumes half of monthly income is sustainable over a 20 year tenure.
    The ceiling is computed for every applicant, eligible or not.
    """

    INCOME_SHARE = 0.5
    TENURE_YEARS = 20

    def size(self, applicant: ApplicantRecord) -> LoanSizing:
        ceiling = applicant.monthly_income * self.INCOME_SHARE * MONTHS_PER_YEAR * self.TENURE_YEARS
        if not math.isfinite(ceiling):
            raise InvalidFieldError("monthlyIncome", "too large to size a loan")
        return LoanSizing(
            ceiling=ceiling,
            max_loan=math.floor(ceiling),
            emi=math.floor(estimate_emi(applicant.loan_amount)),
        )

    def check_ceiling(self, applicant: ApplicantRecord, sizing: LoanSizing) -> RuleOutcome:
        if applicant.loan_amount > sizing.ceiling:
            return RuleOutcome("max_loan", False, 0, f"Exceeds max ₹{sizing.max_loan:,}")
        return RuleOutcome("max_loan", True, 0, "Requested amount within limit")
