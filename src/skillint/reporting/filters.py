"""Output filtering for ``--min-severity``.

Filters only decide what is shown or written. Rules always run, and summary
counts always describe every finding.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from skillint.constants.scoring import SEVERITY_RANK
from skillint.model import Finding
from skillint.types import Severity


@dataclass(frozen=True)
class OutputFilters:
    min_severity: Severity | None = None

    def active(self) -> bool:
        return self.min_severity is not None

    def allows(self, finding: Finding) -> bool:
        if self.min_severity is None:
            return True
        return SEVERITY_RANK[finding.severity] >= SEVERITY_RANK[self.min_severity]


def filter_findings(findings: Iterable[Finding], filters: OutputFilters) -> list[Finding]:
    return [finding for finding in findings if filters.allows(finding)]


def build_filter_metadata(*, total: int, shown: int, filters: OutputFilters) -> dict[str, object] | None:
    """Describe an active filter for report payloads; None when no filter is active."""
    if not filters.active():
        return None
    return {"min_severity": filters.min_severity, "shown": shown, "total": total, "filtered": total - shown}
