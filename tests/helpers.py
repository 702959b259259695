"""Builders for on-disk skill trees used across tests."""

from __future__ import annotations

from pathlib import Path

VALID_BODY = "# Skill\n\n## Overview\n\nText.\n\n## Instructions\n\nDo it.\n\n## Examples\n\nLike so.\n"


def write_skill(
    root: Path,
    directory: str,
    frontmatter: str | None = None,
    body: str = VALID_BODY,
) -> Path:
    """Create ``root/directory/SKILL.md`` and return its path.

    *frontmatter* is the YAML text between the delimiters; ``None`` omits the block.
    """
    folder = root / directory
    folder.mkdir(parents=True, exist_ok=True)
    content = body if frontmatter is None else f"---\n{frontmatter}---\n{body}"
    path = folder / "SKILL.md"
    path.write_text(content, encoding="utf-8")
    return path


def valid_frontmatter(name: str, description: str = "Does things. Use when needed.") -> str:
    return f"name: {name}\ndescription: {description}\n"
