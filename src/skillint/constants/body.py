"""Constants for SKILL.md body and supporting-file checks."""

from __future__ import annotations

DEFAULT_MAX_BODY_LINES: int = 500
DEFAULT_RECOMMENDED_SECTIONS: tuple[str, ...] = ("Overview", "Instructions", "Examples")

SUPPORT_DIRECTORIES: tuple[str, ...] = ("scripts", "references", "assets")
