"""Tests for the scored rules and loan sizing."""

from __future__ import annotations

import math

import pytest

from loan_eligibility.data.schemas import ApplicantRecord
from loan_eligibility.decision.evaluator import EligibilityEvaluator
from loan_eligibility.decision.sizing import LoanSizer, estimate_emi
from loan_eligibility.errors import InvalidFieldError


class TestEligibilityEvaluator:
    @pytest.fixture
    def evaluator(self):
        return EligibilityEvaluator()

    def _outcome(self, evaluation, rule):
        return next(o for o in evaluation.outcomes if o.rule == rule)

    def test_all_rules_pass_for_strong_applicant(self, evaluator, make_record):
        evaluation = evaluator.evaluate(make_record())
        assert evaluation.passed is True
        assert evaluation.points == 100
        assert evaluation.violations == []

    def test_rules_run_in_fixed_order(self, evaluator, make_record):
        evaluation = evaluator.evaluate(make_record())
        assert [o.rule for o in evaluation.outcomes] == [
            "age", "credit_score", "income", "debt_ratio", "employment",
        ]

    @pytest.mark.parametrize("age,passed", [(20, False), (21, True), (65, True), (66, False)])
    def test_age_boundaries(self, evaluator, make_record, age, passed):
        outcome = self._outcome(evaluator.evaluate(make_record(age=age)), "age")
        assert outcome.passed is passed
        if not passed:
            assert outcome.message == "Age must be between 21 and 65 years"

    @pytest.mark.parametrize(
        "credit,passed,points",
        [(750, True, 30), (749, True, 20), (650, True, 20), (649, False, 0)],
    )
    def test_credit_tiers(self, evaluator, make_record, credit, passed, points):
        outcome = self._outcome(evaluator.evaluate(make_record(creditScore=credit)), "credit_score")
        assert outcome.passed is passed
        assert outcome.points == points

    def test_credit_failure_message(self, evaluator, make_record):
        outcome = self._outcome(evaluator.evaluate(make_record(creditScore=600)), "credit_score")
        assert outcome.message == "Credit score below 650"

    def test_income_threshold(self, evaluator, make_record):
        at_threshold = evaluator.evaluate(make_record(monthlyIncome=25000, existingLoans=0))
        below = evaluator.evaluate(make_record(monthlyIncome=24999, existingLoans=0))
        assert self._outcome(at_threshold, "income").passed is True
        failed = self._outcome(below, "income")
        assert failed.passed is False
        assert failed.message == "Income below ₹25,000"

    def test_debt_ratio_includes_estimated_emi(self, evaluator, make_record):
        evaluation = evaluator.evaluate(make_record())
        assert evaluation.estimated_emi == pytest.approx(500000 * 0.01 / 12)
        assert evaluation.debt_ratio == pytest.approx((5000 + 500000 * 0.01 / 12) / 60000)

    def test_debt_ratio_at_half_passes(self, evaluator, make_record):
        evaluation = evaluator.evaluate(make_record(existingLoans=30000, loanAmount=0))
        assert evaluation.debt_ratio == 0.5
        assert self._outcome(evaluation, "debt_ratio").passed is True

    def test_debt_ratio_above_half_fails(self, evaluator, make_record):
        evaluation = evaluator.evaluate(make_record(existingLoans=30001, loanAmount=0))
        outcome = self._outcome(evaluation, "debt_ratio")
        assert outcome.passed is False
        assert outcome.message == "Debt ratio exceeds 50%"

    def test_zero_income_fails_debt_ratio(self, evaluator, make_record):
        evaluation = evaluator.evaluate(make_record(monthlyIncome=0))
        assert evaluation.debt_ratio is None
        assert self._outcome(evaluation, "debt_ratio").passed is False

    @pytest.mark.parametrize(
        "years,passed,points",
        [(3, True, 15), (2.9, True, 10), (1, True, 10), (0.99, False, 0)],
    )
    def test_employment_tiers(self, evaluator, make_record, years, passed, points):
        outcome = self._outcome(evaluator.evaluate(make_record(employmentYears=years)), "employment")
        assert outcome.passed is passed
        assert outcome.points == points

    def test_employment_failure_message(self, evaluator, make_record):
        outcome = self._outcome(evaluator.evaluate(make_record(employmentYears=0)), "employment")
        assert outcome.message == "Need 1+ year employment"

    def test_failures_do_not_short_circuit(self, evaluator, make_record):
        record = make_record(
            age=19, creditScore=600, monthlyIncome=20000,
            employmentYears=0.5, existingLoans=15000, loanAmount=400000,
        )
        evaluation = evaluator.evaluate(record)
        assert [v.rule for v in evaluation.violations] == [
            "age", "credit_score", "income", "debt_ratio", "employment",
        ]

    def test_lower_tiers_still_sum(self, evaluator, make_record):
        evaluation = evaluator.evaluate(make_record(creditScore=700, employmentYears=2))
        assert evaluation.passed is True
        assert evaluation.points == 15 + 20 + 20 + 20 + 10


class TestLoanSizer:
    @pytest.fixture
    def sizer(self):
        return LoanSizer()

    def test_emi_is_flat_estimate(self):
        assert estimate_emi(500000) == pytest.approx(416.6667, rel=1e-4)
        assert estimate_emi(0) == 0

    def test_scenario_ceiling_and_emi(self, sizer, make_record):
        sizing = sizer.size(make_record())
        assert sizing.max_loan == 7_200_000
        assert sizing.emi == 416

    @pytest.mark.parametrize("income", [0, 1, 25000, 33333.33, 60000, 123456.78])
    def test_ceiling_formula(self, sizer, make_record, income):
        sizing = sizer.size(make_record(monthlyIncome=income))
        assert sizing.max_loan == math.floor(income * 0.5 * 12 * 20)
        assert sizing.max_loan >= 0

    def test_request_within_ceiling(self, sizer, make_record):
        record = make_record(loanAmount=7_200_000)
        outcome = sizer.check_ceiling(record, sizer.size(record))
        assert outcome.passed is True

    def test_request_above_ceiling(self, sizer, make_record):
        record = make_record(loanAmount=7_200_001)
        outcome = sizer.check_ceiling(record, sizer.size(record))
        assert outcome.passed is False
        assert outcome.rule == "max_loan"
        assert outcome.message == "Exceeds max ₹7,200,000"

    def test_ceiling_computed_regardless_of_verdict(self, sizer, make_record):
        sizing = sizer.size(make_record(age=80, creditScore=300))
        assert sizing.max_loan == 7_200_000

    def test_non_finite_ceiling_is_rejected(self, sizer):
        # Built directly, bypassing the validator's amount bound.
        record = ApplicantRecord(
            name="Asha Rao", age=30, phone="9876543210", email="asha@example.in",
            monthly_income=1e307, credit_score=780, employment_years=5,
            existing_loans=0, loan_amount=0,
        )
        with pytest.raises(InvalidFieldError) as exc_info:
            sizer.size(record)
        assert exc_info.value.field == "monthlyIncome"

    def test_largest_accepted_income_sizes(self, sizer, make_record):
        sizing = sizer.size(make_record(monthlyIncome=1e15))
        assert sizing.max_loan == 120 * 10**15
