"""SKILL.md reader: YAML frontmatter plus the headings and links of the body."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from skillint.constants.parsing import (
    EXTERNAL_LINK_SCHEMES,
    FENCED_CODE_BLOCK_PATTERN,
    FRONTMATTER_ALT_DELIMITER,
    FRONTMATTER_DELIMITER,
    FRONTMATTER_KEY_PATTERN,
    HEADING_PATTERN,
    INLINE_LINK_PATTERN,
    REFERENCE_LINK_PATTERN,
    SNIPPET_MAX_LENGTH,
)
from skillint.exceptions import SkillParseError
from skillint.model import DocumentHeading, DocumentLink, ParsedSkillDocument

_CLOSING_DELIMITERS = frozenset({FRONTMATTER_DELIMITER, FRONTMATTER_ALT_DELIMITER})


@dataclass
class _Frontmatter:
    mapping: dict[str, Any] | None = None
    present: bool = False
    key_lines: dict[str, int] = field(default_factory=dict)


def parse_skill_markdown_file(path: Path) -> ParsedSkillDocument:
    """Read and parse the SKILL.md at *path*.

    Raises ``SkillParseError`` for malformed frontmatter; I/O and decoding
    errors propagate unchanged.
    """
    return parse_skill_markdown_text(path.read_text(encoding="utf-8"), path)


def parse_skill_markdown_text(raw_text: str, path: Path) -> ParsedSkillDocument:
    lines = raw_text.lstrip("\ufeff").splitlines()
    front, body_lines = _split_frontmatter(lines, path)
    body_start = len(lines) - len(body_lines) + 1
    headings, links = _scan_body(body_lines, body_start)
    return ParsedSkillDocument(
        file_path=path,
        raw_text=raw_text,
        frontmatter=front.mapping,
        frontmatter_present=front.present,
        frontmatter_lines=front.key_lines,
        body="\n".join(body_lines).strip(),
        body_start_line=body_start,
        body_line_count=_content_line_count(body_lines),
        headings=headings,
        links=links,
    )


def _split_frontmatter(lines: list[str], path: Path) -> tuple[_Frontmatter, list[str]]:
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return _Frontmatter(), lines

    closing = next((index for index in range(1, len(lines)) if lines[index].strip() in _CLOSING_DELIMITERS), None)
    if closing is None:
        raise SkillParseError(f"Unterminated frontmatter block in {path}")

    block = lines[1:closing]
    source = "\n".join(block)
    try:
        loaded = yaml.safe_load(source) if source.strip() else None
    except yaml.YAMLError as exc:
        raise SkillParseError(f"Failed to parse frontmatter in {path}: {exc}") from exc
    if loaded is not None and not isinstance(loaded, dict):
        raise SkillParseError(f"Frontmatter in {path} must be a YAML mapping")

    front = _Frontmatter(mapping=loaded, present=True, key_lines=_top_level_key_lines(block))
    return front, lines[closing + 1 :]


def _top_level_key_lines(block: list[str]) -> dict[str, int]:
    """Line number of each unindented key; the block starts on file line 2."""
    positions: dict[str, int] = {}
    for line_number, line in enumerate(block, start=2):
        if not line or line[0].isspace() or line.startswith("#"):
            continue
        match = FRONTMATTER_KEY_PATTERN.match(line)
        if match:
            positions.setdefault(match.group(1), line_number)
    return positions


def _content_line_count(body_lines: list[str]) -> int:
    """Lines between the first and last non-blank body line, inclusive."""
    filled = [index for index, line in enumerate(body_lines) if line.strip()]
    return filled[-1] - filled[0] + 1 if filled else 0


def _scan_body(
    body_lines: list[str],
    body_start: int,
) -> tuple[tuple[DocumentHeading, ...], tuple[DocumentLink, ...]]:
    headings: list[DocumentHeading] = []
    links: list[DocumentLink] = []
    open_fence: str | None = None

    for line_number, line in enumerate(body_lines, start=body_start):
        stripped = line.strip()
        fence = FENCED_CODE_BLOCK_PATTERN.match(stripped)
        if fence:
            marker = fence.group(1)[0]
            if open_fence is None:
                open_fence = marker
            elif marker == open_fence:
                open_fence = None
            continue
        if open_fence or not stripped:
            continue

        heading = HEADING_PATTERN.match(stripped)
        if heading:
            headings.append(DocumentHeading(level=len(heading.group(1)), title=heading.group(2), line=line_number))

        snippet = stripped[:SNIPPET_MAX_LENGTH]
        for target in _link_targets(line, stripped):
            local = _local_path(target)
            if local is not None:
                links.append(DocumentLink(target=local, line=line_number, snippet=snippet))

    return tuple(headings), tuple(links)


def _link_targets(line: str, stripped: str) -> list[str]:
    targets = [match.group(1) for match in INLINE_LINK_PATTERN.finditer(stripped)]
    definition = REFERENCE_LINK_PATTERN.match(line)
    if definition:
        targets.append(definition.group(1))
    return targets


def _local_path(target: str) -> str | None:
    """Path part of a relative link; None for anchors and external URLs."""
    cleaned = target.strip()
    lowered = cleaned.lower()
    if not cleaned or cleaned.startswith("#") or lowered.startswith("//") or lowered.startswith(EXTERNAL_LINK_SCHEMES):
        return None
    for separator in ("#", "?"):
        cleaned = cleaned.split(separator, 1)[0]
    return cleaned or None
