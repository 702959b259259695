"""Immutable entities shared by the parser, detectors, and reporters."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from skillint.types import JsonObject, Severity


@dataclass(frozen=True)
class DocumentHeading:
    """A Markdown ATX heading found outside fenced code blocks."""

    level: int
    title: str
    line: int


@dataclass(frozen=True)
class DocumentLink:
    """A relative link target referenced from the document body."""

    target: str
    line: int
    snippet: str


@dataclass(frozen=True)
class ParsedSkillDocument:
    """Parsed representation of a single SKILL.md file."""

    file_path: Path
    raw_text: str
    frontmatter: dict[str, Any] | None
    frontmatter_present: bool
    frontmatter_lines: dict[str, int]
    body: str
    body_start_line: int
    body_line_count: int
    headings: tuple[DocumentHeading, ...] = ()
    links: tuple[DocumentLink, ...] = ()

    @property
    def skill_dir(self) -> Path:
        """Directory that owns this skill's supporting files."""
        return self.file_path.parent

    def frontmatter_line(self, key: str) -> int:
        """Return the line declaring *key*, falling back to the opening delimiter."""
        return self.frontmatter_lines.get(key, 1)


@dataclass(frozen=True)
class Evidence:
    """Where a finding was observed."""

    path: str
    line: int | None
    snippet: str

    def to_dict(self) -> JsonObject:
        return {"path": self.path, "line": self.line, "snippet": self.snippet}


@dataclass(frozen=True)
class FindingCandidate:
    """Detector output before skill attribution and id assignment."""

    rule_id: str
    severity: Severity
    title: str
    description: str
    evidence: Evidence
    recommendation: str


@dataclass(frozen=True)
class SeverityOverride:
    """Record of a config-driven severity change."""

    original: Severity
    applied: Severity
    reason: str

    def to_dict(self) -> JsonObject:
        return {"original": self.original, "applied": self.applied, "reason": self.reason}


@dataclass(frozen=True)
class Finding:
    """A reported rule violation."""

    id: str
    severity: Severity
    title: str
    description: str
    evidence: Evidence
    skill: str
    rule_id: str
    recommendation: str
    severity_override: SeverityOverride | None = None

    def to_dict(self) -> JsonObject:
        payload: JsonObject = {
            "id": self.id,
            "severity": self.severity,
            "title": self.title,
            "description": self.description,
            "evidence": self.evidence.to_dict(),
            "skill": self.skill,
            "rule_id": self.rule_id,
            "recommendation": self.recommendation,
        }
        if self.severity_override is not None:
            payload["severity_override"] = self.severity_override.to_dict()
        return payload


@dataclass(frozen=True)
class Summary:
    """Per-skill summary written next to ``findings.json``."""

    schema_version: str
    skill: str
    path: str
    sha256: str
    status: str
    finding_count: int
    counts_by_severity: dict[Severity, int]
    counts_by_rule: dict[str, int]
    top_findings: tuple[JsonObject, ...]
    shown_finding_count: int | None = None
    output_filter: dict[str, object] | None = None

    def to_dict(self) -> JsonObject:
        payload: JsonObject = {
            "schema_version": self.schema_version,
            "skill": self.skill,
            "path": self.path,
            "sha256": self.sha256,
            "status": self.status,
            "finding_count": self.finding_count,
            "counts_by_severity": dict(self.counts_by_severity),
            "counts_by_rule": dict(self.counts_by_rule),
            "top_findings": list(self.top_findings),
        }
        if self.shown_finding_count is not None:
            payload["shown_finding_count"] = self.shown_finding_count
        if self.output_filter is not None:
            payload["output_filter"] = self.output_filter  # type: ignore[assignment]
        return payload


@dataclass(frozen=True)
class LintResult:
    """Result of linting a whole corpus."""

    scanned_files: int
    total_findings: int
    counts_by_severity: dict[Severity, int]
    findings: tuple[Finding, ...]
    duration_seconds: float
    warnings: tuple[str, ...] = ()
    counts_by_rule: dict[str, int] = field(default_factory=dict)
    rules_executed: tuple[str, ...] = ()
    skill_names: tuple[str, ...] = ()
