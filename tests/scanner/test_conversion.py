"""Tests for candidate conversion, ordering, and thresholds."""

from __future__ import annotations

from skillint.model import Evidence, FindingCandidate
from skillint.scanner.conversion import candidate_to_finding, finding_sort_key
from skillint.scanner.counts import lint_status, meets_threshold, rule_counts, severity_counts
from skillint.types import RuleOverrideConfig


def _candidate(rule_id: str = "LINK_BROKEN", severity: str = "error", line: int | None = 4) -> FindingCandidate:
    return FindingCandidate(
        rule_id=rule_id,
        severity=severity,  # type: ignore[arg-type]
        title="t",
        description=f"{rule_id} at {line}",
        evidence=Evidence(path="/skills/a/SKILL.md", line=line, snippet="s"),
        recommendation="r",
    )


def test_finding_id_is_stable_and_short() -> None:
    first = candidate_to_finding("a", _candidate())
    second = candidate_to_finding("a", _candidate())
    other_skill = candidate_to_finding("b", _candidate())

    assert first.id == second.id
    assert len(first.id) == 16
    assert first.id != other_skill.id


def test_rule_override_changes_severity_and_records_reason() -> None:
    finding = candidate_to_finding("a", _candidate(), rule_override=RuleOverrideConfig(severity="info"))

    assert finding.severity == "info"
    assert finding.severity_override is not None
    assert finding.severity_override.original == "error"
    assert finding.severity_override.reason == "rule_overrides.LINK_BROKEN.severity"
    assert finding.to_dict()["severity_override"]["applied"] == "info"


def test_same_severity_override_is_not_recorded() -> None:
    finding = candidate_to_finding("a", _candidate(), rule_override=RuleOverrideConfig(severity="error"))

    assert finding.severity_override is None
    assert "severity_override" not in finding.to_dict()


def test_sort_key_orders_most_severe_first() -> None:
    findings = [
        candidate_to_finding("a", _candidate("SECTION_MISSING", "info", 1)),
        candidate_to_finding("a", _candidate("LINK_BROKEN", "error", 9)),
        candidate_to_finding("a", _candidate("NAME_FORMAT", "error", 2)),
        candidate_to_finding("a", _candidate("BODY_TOO_LONG", "warning", None)),
    ]

    ordered = [finding.rule_id for finding in sorted(findings, key=finding_sort_key)]

    assert ordered == ["NAME_FORMAT", "LINK_BROKEN", "BODY_TOO_LONG", "SECTION_MISSING"]


def test_counts_and_thresholds() -> None:
    findings = [
        candidate_to_finding("a", _candidate("LINK_BROKEN", "error", 1)),
        candidate_to_finding("a", _candidate("LINK_BROKEN", "error", 2)),
        candidate_to_finding("a", _candidate("SECTION_MISSING", "info", 3)),
    ]

    assert severity_counts(findings) == {"error": 2, "warning": 0, "info": 1}
    assert rule_counts(findings) == {"LINK_BROKEN": 2, "SECTION_MISSING": 1}
    assert len(meets_threshold(findings, "info")) == 3
    assert len(meets_threshold(findings, "warning")) == 2
    assert meets_threshold(findings, "never") == []
    assert lint_status(findings) == "fail"
    assert lint_status(findings[2:]) == "pass"
