"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "skillint.yaml"
DEFAULT_MAX_FILE_MB: int = 2

DEFAULT_SKILL_GLOBS: tuple[str, ...] = ("**/SKILL.md",)

RULE_OVERRIDE_ALLOWED_KEYS: frozenset[str] = frozenset({"severity"})
