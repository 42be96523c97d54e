"""Exceptions raised by the eligibility engine."""

from __future__ import annotations


class EligibilityError(Exception):
    """Base class for all loan eligibility errors."""


class ValidationError(EligibilityError):
    """The applicant record cannot be evaluated as given.

    This is a caller-input defect, distinct from a business rejection:
    an ineligible applicant still gets a full result.
    """

    def __init__(self, field: str, detail: str):
        self.field = field
        self.detail = detail
        super().__init__(f"{field}: {detail}")


class MissingFieldError(ValidationError):
    """A required field is absent, empty, or does not parse."""


class InvalidFieldError(ValidationError):
    """A field parsed but lies outside its allowed domain."""
