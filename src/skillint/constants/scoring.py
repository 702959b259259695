"""Constants for severity ranking and summaries."""

from __future__ import annotations

SEVERITY_RANK: dict[str, int] = {"info": 0, "warning": 1, "error": 2}
SEVERITY_ORDER: tuple[str, ...] = ("error", "warning", "info")
VALID_SEVERITIES: frozenset[str] = frozenset(SEVERITY_RANK)

TOP_FINDINGS_DEFAULT_LIMIT: int = 5

FAIL_ON_NEVER: str = "never"
DEFAULT_FAIL_ON: str = "error"
FAIL_ON_CHOICES: tuple[str, ...] = ("info", "warning", "error", FAIL_ON_NEVER)

STATUS_PASS: str = "pass"
STATUS_FAIL: str = "fail"
