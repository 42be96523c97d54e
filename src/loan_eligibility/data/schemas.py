"""Pydantic schemas for applicant records and eligibility results."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApplicantRecord(BaseModel):
    """A validated applicant. Field aliases match the camelCase input form."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    age: int
    phone: str = Field(min_length=1)
    email: str = Field(min_length=1)
    monthly_income: float = Field(ge=0)
    credit_score: int
    employment_years: float = Field(ge=0)
    existing_loans: float = Field(ge=0)
    loan_amount: float = Field(ge=0)


class ReasonCodeEntry(BaseModel):
    code: str
    reason: str
    label: str


class EligibilityResult(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    eligible: bool
    score: int = Field(ge=0, le=100)
    reasons: list[str]
    max_loan: int = Field(ge=0)
    emi: int = Field(ge=0)
    # Percentage with one decimal digit; None when monthly income is zero.
    ratio: Optional[float] = None
    reason_codes: list[ReasonCodeEntry] = Field(default_factory=list)
    summary: str = ""
