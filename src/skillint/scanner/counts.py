"""Counting and status helpers for findings and summaries."""

from __future__ import annotations

from collections import Counter

from skillint.constants.scoring import (
    FAIL_ON_NEVER,
    SEVERITY_RANK,
    STATUS_FAIL,
    STATUS_PASS,
    TOP_FINDINGS_DEFAULT_LIMIT,
)
from skillint.model import Finding
from skillint.scanner.conversion import finding_sort_key
from skillint.types import Severity


def severity_counts(findings: list[Finding]) -> dict[Severity, int]:
    """Count findings by severity with stable keys."""
    counts = Counter(finding.severity for finding in findings)
    return {
        "error": int(counts.get("error", 0)),
        "warning": int(counts.get("warning", 0)),
        "info": int(counts.get("info", 0)),
    }


def rule_counts(findings: list[Finding]) -> dict[str, int]:
    """Count findings per rule id in sorted key order."""
    counts = Counter(finding.rule_id for finding in findings)
    return {rule_id: int(count) for rule_id, count in sorted(counts.items())}


def meets_threshold(findings: list[Finding], fail_on: str) -> list[Finding]:
    """Return findings whose severity is at or above *fail_on*."""
    if fail_on == FAIL_ON_NEVER:
        return []
    threshold = SEVERITY_RANK[fail_on]
    return [finding for finding in findings if SEVERITY_RANK.get(finding.severity, 0) >= threshold]


def lint_status(findings: list[Finding], fail_on: str = "error") -> str:
    """Map findings to a pass/fail status under *fail_on*."""
    return STATUS_FAIL if meets_threshold(findings, fail_on) else STATUS_PASS


def sorted_top_findings(
    findings: list[Finding],
    limit: int = TOP_FINDINGS_DEFAULT_LIMIT,
) -> list[Finding]:
    """Return the most severe findings sorted deterministically."""
    return sorted(findings, key=finding_sort_key)[:limit]
