"""Evaluate an applicant record stored in a YAML or JSON file."""

import argparse
import json
import sys
from pathlib import Path

import yaml

from loan_eligibility.config.settings import load_settings
from loan_eligibility.decision.engine import EligibilityEngine
from loan_eligibility.errors import ValidationError
from loan_eligibility.utils.logging import setup_logging

EXIT_OK = 0
EXIT_INVALID_INPUT = 2


def load_applicant(path: Path) -> dict:
    """Read the applicant mapping. Raises ValueError on unreadable content."""
    try:
        with open(path) as f:
            # JSON is a subset of YAML
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ValueError(f"cannot read {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ValueError(f"{path} is not valid YAML or JSON: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping of applicant fields")
    return raw


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("applicant", type=Path, help="YAML or JSON file with the applicant fields")
    parser.add_argument("--summary-only", action="store_true", help="Print only the narrated summary")
    args = parser.parse_args(argv)

    settings = load_settings()
    setup_logging(settings.log_level, json_output=False, stream=sys.stderr)

    try:
        raw = load_applicant(args.applicant)
    except ValueError as e:
        print(e, file=sys.stderr)
        return EXIT_INVALID_INPUT

    try:
        result = EligibilityEngine().evaluate(raw)
    except ValidationError as e:
        print(f"Invalid applicant record: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    if args.summary_only:
        print(result.summary)
    else:
        print(json.dumps(result.model_dump(by_alias=True), indent=2, ensure_ascii=False))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
