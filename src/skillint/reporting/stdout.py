"""Terminal summary for ``skillint lint``."""

from __future__ import annotations

from skillint.constants.branding import ASCII_LOGO_LINES, LINT_SUMMARY_TITLE
from skillint.constants.reporting import ANSI_GREEN, ANSI_RED, ANSI_RESET, SEVERITY_COLORS
from skillint.constants.scoring import DEFAULT_FAIL_ON, FAIL_ON_NEVER, SEVERITY_ORDER
from skillint.model import Finding, LintResult
from skillint.reporting.filters import OutputFilters, filter_findings
from skillint.scanner.counts import meets_threshold, rule_counts
from skillint.types import Severity

# (header, width, right-aligned)
_TABLE_COLUMNS: tuple[tuple[str, int, bool], ...] = (
    ("Skill", 24, False),
    ("Rule", 26, False),
    ("Severity", 8, False),
    ("Line", 5, True),
)
_LABEL_WIDTH = 12
_SEPARATOR = "  " + "─" * 38


class StdoutReporter:
    """Render a ``LintResult`` as a header block followed by a findings table."""

    def __init__(
        self,
        result: LintResult,
        *,
        color: bool = True,
        verbose: bool = False,
        min_severity: Severity | None = None,
        fail_on: str = DEFAULT_FAIL_ON,
    ) -> None:
        self._result = result
        self._color = color
        self._verbose = verbose
        self._fail_on = fail_on
        self._filters = OutputFilters(min_severity=min_severity)
        self._shown = filter_findings(result.findings, self._filters)

    def render(self) -> str:
        blocks = [self._header()]
        if self._shown:
            blocks.append(self._table())
        return "\n".join(blocks)

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{ANSI_RESET}" if self._color and color else text

    def _severity(self, severity: str) -> str:
        return self._paint(severity, SEVERITY_COLORS.get(severity, ""))

    def _header(self) -> str:
        result = self._result
        rows: list[tuple[str, str]] = [
            ("Skills", self._skills_line()),
            ("Findings", self._findings_line()),
            ("Severities", self._severities_line()),
            ("Top rules", _top_rules(result.counts_by_rule or rule_counts(list(result.findings)))),
        ]
        if self._verbose and result.rules_executed:
            rows.append(("Rules run", f"{len(result.rules_executed)} ({_preview(result.rules_executed)})"))
        rows.append(("Verdict", self._verdict()))
        rows.append(("Duration", f"{result.duration_seconds:.3f}s"))
        if self._verbose:
            rows.extend(("Warning", warning) for warning in result.warnings)

        lines = ["", *(f"  {line}" for line in ASCII_LOGO_LINES), f"  {LINT_SUMMARY_TITLE}", _SEPARATOR, ""]
        lines.extend(f"  {label:<{_LABEL_WIDTH}}{value}" for label, value in rows)
        lines.append("")
        return "\n".join(lines)

    def _skills_line(self) -> str:
        scanned = self._result.scanned_files
        with_findings = len({finding.skill for finding in self._result.findings})
        return f"{scanned} linted / {with_findings} with findings / {max(0, scanned - with_findings)} clean"

    def _severities_line(self) -> str:
        counts: dict[str, int] = dict(self._result.counts_by_severity)
        return " · ".join(f"{counts.get(severity, 0)} {self._severity(severity)}" for severity in SEVERITY_ORDER)

    def _findings_line(self) -> str:
        total = self._result.total_findings
        if not self._filters.active():
            return str(total)
        shown = len(self._shown)
        return f"{shown} shown / {total} total ({total - shown} below {self._filters.min_severity})"

    def _verdict(self) -> str:
        if self._fail_on == FAIL_ON_NEVER:
            return f"{self._paint('PASS', ANSI_GREEN)} (fail-on disabled)"
        matched = meets_threshold(list(self._result.findings), self._fail_on)
        if matched:
            return f"{self._paint('FAIL', ANSI_RED)} ({len(matched)} finding(s) >= {self._fail_on})"
        return f"{self._paint('PASS', ANSI_GREEN)} (no findings >= {self._fail_on})"

    def _table(self) -> str:
        def border(left: str, mid: str, right: str) -> str:
            return "  " + left + mid.join("─" * (width + 2) for _, width, _ in _TABLE_COLUMNS) + right

        header = [title for title, _, _ in _TABLE_COLUMNS]
        lines = ["  Findings", border("┌", "┬", "┐"), self._table_row(header), border("├", "┼", "┤")]
        lines.extend(self._table_row(_cells(finding), severity=finding.severity) for finding in self._shown)
        lines.append(border("└", "┴", "┘"))
        return "\n".join(lines)

    def _table_row(self, cells: list[str], *, severity: str | None = None) -> str:
        padded = []
        for (_, width, right), cell in zip(_TABLE_COLUMNS, cells, strict=True):
            text = f"{cell[:width]:>{width}}" if right else f"{cell[:width]:<{width}}"
            padded.append(text)
        if severity is not None:
            # Colour after padding so escape codes do not count toward the width.
            padded[2] = padded[2].replace(severity, self._severity(severity), 1)
        return "  │ " + " │ ".join(padded) + " │"


def _cells(finding: Finding) -> list[str]:
    line = "-" if finding.evidence.line is None else str(finding.evidence.line)
    return [finding.skill, finding.rule_id, finding.severity, line]


def _top_rules(counts: dict[str, int], limit: int = 5) -> str:
    """Most frequent rules first, ties broken by rule id."""
    if not counts:
        return "none"
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    parts = [f"{rule_id} {count}" for rule_id, count in ranked[:limit]]
    if len(ranked) > limit:
        parts.append(f"(+{len(ranked) - limit} more)")
    return " · ".join(parts)


def _preview(rule_ids: tuple[str, ...], limit: int = 6) -> str:
    if len(rule_ids) <= limit:
        return ", ".join(rule_ids)
    return f"{', '.join(rule_ids[:limit])}, +{len(rule_ids) - limit} more"
