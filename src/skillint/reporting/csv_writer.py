"""Flat CSV export of every finding in a run."""

from __future__ import annotations

import csv
import io
from pathlib import Path

from skillint.constants.reporting import CSV_COLUMNS, CSV_FINDINGS_FILENAME, REPORT_TEMP_PREFIX
from skillint.io import write_text_atomic
from skillint.model import Finding
from skillint.scanner.conversion import finding_sort_key


def _csv_row(finding: Finding) -> dict[str, object]:
    evidence = finding.evidence
    return {
        "id": finding.id,
        "skill": finding.skill,
        "rule_id": finding.rule_id,
        "severity": finding.severity,
        "path": evidence.path,
        "line": "" if evidence.line is None else evidence.line,
        "title": finding.title,
        "description": finding.description,
        "recommendation": finding.recommendation,
    }


def render_csv_string(findings: list[Finding]) -> str:
    """Render findings, most severe first, under a fixed header."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    writer.writerows(_csv_row(finding) for finding in sorted(findings, key=finding_sort_key))
    return buffer.getvalue()


def write_csv_findings(out_root: Path, findings: list[Finding]) -> Path:
    path = out_root / CSV_FINDINGS_FILENAME
    write_text_atomic(path=path, content=render_csv_string(findings), temp_prefix=REPORT_TEMP_PREFIX, temp_suffix=".csv")
    return path
