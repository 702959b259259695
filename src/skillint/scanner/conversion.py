"""Finding conversion helpers for the lint pipeline."""

from __future__ import annotations

import hashlib

from skillint.constants.hashing import FINDING_ID_HASH_LENGTH
from skillint.constants.scoring import SEVERITY_RANK
from skillint.model import Finding, FindingCandidate, SeverityOverride
from skillint.types import RuleOverrideConfig


def candidate_to_finding(
    skill_name: str,
    candidate: FindingCandidate,
    *,
    rule_override: RuleOverrideConfig | None = None,
) -> Finding:
    """Convert a finding candidate into a stable, serialized finding."""
    severity = candidate.severity
    severity_override: SeverityOverride | None = None
    if rule_override is not None and rule_override.severity is not None and rule_override.severity != severity:
        severity_override = SeverityOverride(
            original=severity,
            applied=rule_override.severity,
            reason=f"rule_overrides.{candidate.rule_id}.severity",
        )
        severity = rule_override.severity

    identity = "|".join(
        [
            skill_name,
            candidate.rule_id,
            candidate.description,
            candidate.evidence.path,
            str(candidate.evidence.line),
        ]
    )
    finding_id = hashlib.sha256(identity.encode("utf-8")).hexdigest()[:FINDING_ID_HASH_LENGTH]

    return Finding(
        id=finding_id,
        severity=severity,
        title=candidate.title,
        description=candidate.description,
        evidence=candidate.evidence,
        skill=skill_name,
        rule_id=candidate.rule_id,
        recommendation=candidate.recommendation,
        severity_override=severity_override,
    )


def finding_sort_key(finding: Finding) -> tuple[int, str, int, str, str]:
    """Most severe first, then by location and rule."""
    return (
        -SEVERITY_RANK.get(finding.severity, 0),
        finding.evidence.path,
        finding.evidence.line or 0,
        finding.rule_id,
        finding.id,
    )
