"""Per-skill ``findings.json`` / ``summary.json`` and corpus-wide report files."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from skillint.constants.reporting import (
    FINDINGS_FILENAME,
    REPORT_TEMP_PREFIX,
    REPORT_TEMP_SUFFIX,
    SCHEMA_VERSION,
    SUMMARY_FILENAME,
)
from skillint.io import file_sha256, write_json_atomic
from skillint.model import Finding, Summary
from skillint.reporting.csv_writer import write_csv_findings
from skillint.reporting.filters import OutputFilters, build_filter_metadata, filter_findings
from skillint.reporting.sarif_writer import write_sarif_findings
from skillint.scanner.counts import lint_status, rule_counts, severity_counts, sorted_top_findings
from skillint.types import JsonObject
from skillint.utils import relative_posix

logger = logging.getLogger(__name__)


def _write_json(path: Path, payload: object) -> None:
    write_json_atomic(path=path, payload=payload, temp_prefix=REPORT_TEMP_PREFIX, temp_suffix=REPORT_TEMP_SUFFIX)


def _top_entry(finding: Finding) -> JsonObject:
    return {
        "id": finding.id,
        "rule_id": finding.rule_id,
        "title": finding.title,
        "severity": finding.severity,
        "evidence": finding.evidence.to_dict(),
    }


def build_summary(
    skill_name: str,
    findings: list[Finding],
    *,
    path: str,
    sha256: str,
    all_findings: list[Finding] | None = None,
    output_filter: dict[str, object] | None = None,
) -> Summary:
    """Build the per-skill summary.

    Counts and status always describe every finding for the skill. When an
    output filter hid some of them, pass the unfiltered list as *all_findings*
    and ``shown_finding_count`` records how many were written.
    """
    counted = findings if all_findings is None else all_findings
    return Summary(
        schema_version=SCHEMA_VERSION,
        skill=skill_name,
        path=path,
        sha256=sha256,
        status=lint_status(counted),
        finding_count=len(counted),
        counts_by_severity=severity_counts(counted),
        counts_by_rule=rule_counts(counted),
        top_findings=tuple(_top_entry(finding) for finding in sorted_top_findings(counted)),
        shown_finding_count=None if all_findings is None else len(findings),
        output_filter=output_filter,
    )


def write_skill_reports(
    out_root: Path,
    skill_name: str,
    findings: list[Finding],
    *,
    skill_path: Path,
    root: Path,
    all_findings: list[Finding] | None = None,
    output_filter: dict[str, object] | None = None,
) -> Summary:
    """Write ``<out_root>/<skill_name>/{findings,summary}.json`` and return the summary."""
    target = out_root / skill_name
    ordered = sorted(findings, key=lambda finding: finding.id)
    summary = build_summary(
        skill_name,
        ordered,
        path=relative_posix(skill_path, root),
        sha256=file_sha256(skill_path),
        all_findings=all_findings,
        output_filter=output_filter,
    )
    _write_json(target / FINDINGS_FILENAME, [finding.to_dict() for finding in ordered])
    _write_json(target / SUMMARY_FILENAME, summary.to_dict())
    return summary


def write_corpus_reports(
    out_root: Path,
    *,
    root: Path,
    findings_by_skill: Mapping[str, list[Finding]],
    paths_by_skill: Mapping[str, Path],
    output_formats: tuple[str, ...],
    filters: OutputFilters,
) -> None:
    """Write every per-skill report plus the requested corpus-wide CSV/SARIF files."""
    everything: list[Finding] = []
    for skill_name in sorted(findings_by_skill):
        skill_findings = findings_by_skill[skill_name]
        everything.extend(skill_findings)
        shown = filter_findings(skill_findings, filters)
        write_skill_reports(
            out_root,
            skill_name,
            shown,
            skill_path=paths_by_skill[skill_name],
            root=root,
            all_findings=skill_findings,
            output_filter=build_filter_metadata(total=len(skill_findings), shown=len(shown), filters=filters),
        )

    shown_everything = filter_findings(everything, filters)
    if "csv" in output_formats:
        write_csv_findings(out_root, shown_everything)
    if "sarif" in output_formats:
        write_sarif_findings(
            out_root,
            shown_everything,
            rule_distribution=rule_counts(everything),
            filter_metadata=build_filter_metadata(
                total=len(everything), shown=len(shown_everything), filters=filters
            ),
        )
    logger.info("Wrote reports for %d skill(s) to %s", len(findings_by_skill), out_root)
