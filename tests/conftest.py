"""Shared test fixtures for loan eligibility tests."""

from __future__ import annotations

import pytest
import structlog

from loan_eligibility.config.settings import NarrationSettings, ServingSettings, Settings
from loan_eligibility.data.validation import ApplicantValidator
from loan_eligibility.decision.engine import EligibilityEngine


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configured by an app or CLI under test."""
    yield
    structlog.reset_defaults()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Settings with the artificial delays switched off."""
    return Settings(
        serving=ServingSettings(result_delay_seconds=0.0, narration_delay_seconds=0.0),
        narration=NarrationSettings(enabled=True),
        log_level="DEBUG",
    )


@pytest.fixture
def engine() -> EligibilityEngine:
    return EligibilityEngine()


@pytest.fixture
def eligible_applicant() -> dict:
    """Applicant that passes every rule (scenario A)."""
    return {
        "name": "Asha Rao",
        "age": 30,
        "phone": "9876543210",
        "email": "asha@example.in",
        "monthlyIncome": 60000,
        "creditScore": 780,
        "employmentYears": 5,
        "existingLoans": 5000,
        "loanAmount": 500000,
    }


@pytest.fixture
def ineligible_applicant() -> dict:
    """Applicant failing every scored rule (scenario B)."""
    return {
        "name": "Ravi Kumar",
        "age": 19,
        "phone": "9123456780",
        "email": "ravi@example.in",
        "monthlyIncome": 20000,
        "creditScore": 600,
        "employmentYears": 0.5,
        "existingLoans": 15000,
        "loanAmount": 400000,
    }


@pytest.fixture
def form_applicant(eligible_applicant) -> dict:
    """Scenario A as submitted by a web form: every value a string."""
    return {key: str(value) for key, value in eligible_applicant.items()}


@pytest.fixture
def make_record(eligible_applicant):
    """Build a validated ApplicantRecord from scenario A with overrides."""
    validator = ApplicantValidator()

    def _make(**overrides):
        raw = dict(eligible_applicant)
        raw.update(overrides)
        return validator.validate(raw)

    return _make
