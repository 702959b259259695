"""CLI subcommand handlers and threshold evaluation."""

from __future__ import annotations

import argparse
import sys

from skillint.exceptions.validation import format_errors
from skillint.model import LintResult
from skillint.scanner.counts import meets_threshold
from skillint.validation import preflight_validate


def evaluate_fail_threshold(result: LintResult, *, fail_on: str) -> int:
    """Return 1 if any finding is at or above *fail_on*, 0 otherwise."""
    return 1 if meets_threshold(list(result.findings), fail_on) else 0


def handle_validate_config(args: argparse.Namespace) -> int:
    """Run config validation and report results."""
    errors = preflight_validate(root=args.root, config_path=args.config)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Configuration is valid.")
    return 0


def parse_output_formats(raw: str) -> tuple[str, ...] | None:
    """Split a comma-separated format list; None when any token is empty."""
    raw_tokens = raw.split(",")
    formats = tuple(token.strip() for token in raw_tokens)
    if not formats or any(not token for token in formats):
        return None
    return formats
