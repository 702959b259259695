"""Shared helpers for detector implementations."""

from __future__ import annotations

from skillint.constants.parsing import SNIPPET_MAX_LENGTH
from skillint.constants.rules import DEFAULT_RULE_SEVERITIES
from skillint.model import Evidence, FindingCandidate, ParsedSkillDocument


def frontmatter_evidence(parsed: ParsedSkillDocument, key: str | None = None) -> Evidence:
    """Build evidence pointing at a frontmatter key, or at the opening delimiter."""
    line = parsed.frontmatter_line(key) if key else 1
    return line_evidence(parsed, line)


def line_evidence(parsed: ParsedSkillDocument, line: int, snippet: str | None = None) -> Evidence:
    """Build evidence for a 1-based line of the raw document."""
    if snippet is None:
        lines = parsed.raw_text.lstrip("\ufeff").splitlines()
        snippet = lines[line - 1].strip() if 0 < line <= len(lines) else ""
    return Evidence(path=str(parsed.file_path), line=line, snippet=snippet[:SNIPPET_MAX_LENGTH])


def make_candidate(
    rule_id: str,
    *,
    title: str,
    description: str,
    evidence: Evidence,
    recommendation: str,
) -> FindingCandidate:
    """Build a candidate carrying the rule's default severity."""
    return FindingCandidate(
        rule_id=rule_id,
        severity=DEFAULT_RULE_SEVERITIES[rule_id],  # type: ignore[arg-type]
        title=title,
        description=description,
        evidence=evidence,
        recommendation=recommendation,
    )


def dedupe_candidates(candidates: list[FindingCandidate]) -> list[FindingCandidate]:
    """Drop duplicate candidates sharing rule, location, and description."""
    seen: set[tuple[str, str, int | None, str]] = set()
    deduped: list[FindingCandidate] = []
    for candidate in candidates:
        key = (
            candidate.rule_id,
            candidate.evidence.path,
            candidate.evidence.line,
            candidate.description,
        )
        if key in seen:
            continue
        seen.add(key)
        deduped.append(candidate)
    return deduped
