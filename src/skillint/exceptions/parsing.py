"""Parsing-related exceptions."""

from __future__ import annotations

from skillint.exceptions.base import SkillintError


class SkillParseError(SkillintError, ValueError):
    """Raised when a SKILL.md file cannot be parsed."""
