"""Constants for parsing behavior."""

from __future__ import annotations

import re
from re import Pattern

SNIPPET_MAX_LENGTH: int = 200
FRONTMATTER_DELIMITER: str = "---"
# YAML allows "..." as an explicit document end marker.
FRONTMATTER_ALT_DELIMITER: str = "..."

FRONTMATTER_KEY_PATTERN: Pattern[str] = re.compile(r"^([A-Za-z0-9_-]+)\s*:")
FENCED_CODE_BLOCK_PATTERN: Pattern[str] = re.compile(r"^(`{3,}|~{3,})")
HEADING_PATTERN: Pattern[str] = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")

# Inline links and images: [text](target "title") / ![alt](target)
INLINE_LINK_PATTERN: Pattern[str] = re.compile(r"!?\[[^\]]*\]\(\s*<?([^)\s>]+)>?(?:\s+[\"'][^)]*[\"'])?\s*\)")
# Reference definitions: [label]: target
REFERENCE_LINK_PATTERN: Pattern[str] = re.compile(r"^\s{0,3}\[[^\]]+\]:\s*<?(\S+?)>?(?:\s+.*)?$")

EXTERNAL_LINK_SCHEMES: tuple[str, ...] = ("http:", "https:", "mailto:", "ftp:", "tel:", "data:")
