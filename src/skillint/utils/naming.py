"""String and path normalization helpers."""

from __future__ import annotations

from pathlib import Path

from skillint.constants.discovery import SKILL_NAME_FALLBACK
from skillint.constants.naming import COLLAPSE_DASH_PATTERN, NON_OUTPUT_NAME_PATTERN


def sanitize_output_name(raw_name: str) -> str:
    """Normalize names for stable output directory paths."""
    normalized = raw_name.strip().lower()
    normalized = NON_OUTPUT_NAME_PATTERN.sub("-", normalized)
    normalized = COLLAPSE_DASH_PATTERN.sub("-", normalized)
    normalized = normalized.strip("-._")
    return normalized or SKILL_NAME_FALLBACK


def relative_posix(path: Path, root: Path) -> str:
    """Return *path* relative to *root* in POSIX form, or absolute when outside."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
