"""Core data models for Skillint."""

from .entities import (
    DocumentHeading,
    DocumentLink,
    Evidence,
    Finding,
    FindingCandidate,
    LintResult,
    ParsedSkillDocument,
    SeverityOverride,
    Summary,
)

__all__ = [
    "DocumentHeading",
    "DocumentLink",
    "Evidence",
    "Finding",
    "FindingCandidate",
    "LintResult",
    "ParsedSkillDocument",
    "SeverityOverride",
    "Summary",
]
