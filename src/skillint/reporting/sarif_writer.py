"""SARIF 2.1.0 export for code-scanning dashboards."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from skillint import __version__
from skillint.constants.reporting import (
    SARIF_FINDINGS_FILENAME,
    SARIF_SCHEMA_URI,
    SARIF_SEVERITY_MAP,
    SARIF_TOOL_NAME,
    SARIF_VERSION,
)
from skillint.constants.rules import DEFAULT_RULE_SEVERITIES
from skillint.io import dump_json, write_text_atomic
from skillint.model import Evidence, Finding
from skillint.scanner.conversion import finding_sort_key
from skillint.scanner.counts import rule_counts


def _level(severity: str) -> str:
    return SARIF_SEVERITY_MAP.get(severity, "note")


def _physical_location(evidence: Evidence) -> dict[str, Any]:
    location: dict[str, Any] = {"artifactLocation": {"uri": evidence.path}}
    if evidence.line is not None:
        location["region"] = {"startLine": evidence.line}
    return location


def _result(finding: Finding) -> dict[str, Any]:
    properties: dict[str, Any] = {"skill": finding.skill, "recommendation": finding.recommendation}
    if finding.severity_override is not None:
        properties["severity_override"] = finding.severity_override.to_dict()
    return {
        "ruleId": finding.rule_id,
        "level": _level(finding.severity),
        "message": {"text": finding.description},
        "locations": [{"physicalLocation": _physical_location(finding.evidence)}],
        "partialFingerprints": {"findingId": finding.id},
        "properties": properties,
    }


def _rule_descriptors(findings: list[Finding]) -> list[dict[str, Any]]:
    """One descriptor per reported rule, carrying its default level."""
    titles: dict[str, str] = {}
    for finding in findings:
        titles.setdefault(finding.rule_id, finding.title)
    return [
        {
            "id": rule_id,
            "shortDescription": {"text": titles[rule_id]},
            "defaultConfiguration": {"level": _level(DEFAULT_RULE_SEVERITIES.get(rule_id, "info"))},
        }
        for rule_id in sorted(titles)
    ]


def build_sarif_envelope(
    findings: list[Finding],
    *,
    rule_distribution: dict[str, int] | None = None,
    filter_metadata: dict[str, object] | None = None,
) -> dict[str, Any]:
    ordered = sorted(findings, key=finding_sort_key)
    properties: dict[str, object] = {
        "ruleDistribution": rule_counts(ordered) if rule_distribution is None else rule_distribution,
    }
    if filter_metadata is not None:
        properties["filter"] = filter_metadata
    driver = {"name": SARIF_TOOL_NAME, "version": __version__, "rules": _rule_descriptors(ordered)}
    run = {"tool": {"driver": driver}, "results": [_result(finding) for finding in ordered], "properties": properties}
    return {"$schema": SARIF_SCHEMA_URI, "version": SARIF_VERSION, "runs": [run]}


def write_sarif_findings(
    out_root: Path,
    findings: list[Finding],
    *,
    rule_distribution: dict[str, int] | None = None,
    filter_metadata: dict[str, object] | None = None,
) -> Path:
    """Write ``findings.sarif`` under *out_root* and return its path."""
    path = out_root / SARIF_FINDINGS_FILENAME
    envelope = build_sarif_envelope(findings, rule_distribution=rule_distribution, filter_metadata=filter_metadata)
    write_text_atomic(path=path, content=dump_json(envelope), temp_prefix=".tmp-", temp_suffix=".sarif")
    return path
