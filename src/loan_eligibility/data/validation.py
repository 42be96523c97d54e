"""Presence and parse checks for raw applicant records."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from loan_eligibility.data.schemas import ApplicantRecord
from loan_eligibility.errors import InvalidFieldError, MissingFieldError


class ApplicantValidator:
    """Turn a raw field-keyed record into an ApplicantRecord.

    Fields are checked in REQUIRED_FIELDS order and the first failure is
    raised. No business rule is applied here.
    """

    # External (camelCase) name -> ApplicantRecord attribute
    REQUIRED_FIELDS = {
        "name": "name",
        "age": "age",
        "phone": "phone",
        "email": "email",
        "monthlyIncome": "monthly_income",
        "creditScore": "credit_score",
        "employmentYears": "employment_years",
        "existingLoans": "existing_loans",
        "loanAmount": "loan_amount",
    }

    TEXT_FIELDS = {"name", "phone", "email"}
    INTEGER_FIELDS = {"age", "creditScore"}
    NON_NEGATIVE_FIELDS = {"monthlyIncome", "employmentYears", "existingLoans", "loanAmount"}
    AMOUNT_FIELDS = {"monthlyIncome", "existingLoans", "loanAmount"}
    # Rupee amounts above this cannot be sized without float overflow.
    MAX_AMOUNT = 1e15

    def validate(self, raw: Mapping[str, Any]) -> ApplicantRecord:
        parsed: dict[str, Any] = {}
        for field, attribute in self.REQUIRED_FIELDS.items():
            value = self._lookup(raw, field, attribute)
            if field in self.TEXT_FIELDS:
                parsed[attribute] = self._parse_text(field, value)
            else:
                parsed[attribute] = self._parse_number(field, value)
        return ApplicantRecord(**parsed)

    @staticmethod
    def _lookup(raw: Mapping[str, Any], field: str, attribute: str) -> Any:
        if field in raw:
            return raw[field]
        return raw.get(attribute)

    @staticmethod
    def _parse_text(field: str, value: Any) -> str:
        if value is None:
            raise MissingFieldError(field, "field is required")
        text = str(value).strip()
        if not text:
            raise MissingFieldError(field, "field must not be empty")
        return text

    def _parse_number(self, field: str, value: Any) -> int | float:
        if value is None:
            raise MissingFieldError(field, "field is required")
        if isinstance(value, bool):
            raise MissingFieldError(field, f"expected a number, got {value!r}")

        if isinstance(value, (int, float)):
            number = float(value)
        else:
            text = str(value).strip()
            if not text:
                raise MissingFieldError(field, "field must not be empty")
            try:
                number = float(text.replace(",", ""))
            except ValueError:
                raise MissingFieldError(field, f"expected a number, got {text!r}") from None

        if not math.isfinite(number):
            raise InvalidFieldError(field, "must be a finite number")
        if field in self.NON_NEGATIVE_FIELDS and number < 0:
            raise InvalidFieldError(field, "must not be negative")
        if field in self.AMOUNT_FIELDS and number > self.MAX_AMOUNT:
            raise InvalidFieldError(field, f"must not exceed {self.MAX_AMOUNT:,.0f}")

        if field in self.INTEGER_FIELDS:
            return math.trunc(number)
        return number
