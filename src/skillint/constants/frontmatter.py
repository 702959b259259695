"""Frontmatter contract for skill documents.

The agent runtime recognizes a small, fixed set of keys. ``name`` and
``description`` are required; everything else is optional but typed.
"""

from __future__ import annotations

import re
from re import Pattern

FIELD_NAME: str = "name"
FIELD_DESCRIPTION: str = "description"
FIELD_ALLOWED_TOOLS: str = "allowed-tools"
FIELD_DISABLE_MODEL_INVOCATION: str = "disable-model-invocation"
FIELD_MODEL: str = "model"
FIELD_LICENSE: str = "license"
FIELD_COMPATIBILITY: str = "compatibility"
FIELD_METADATA: str = "metadata"
FIELD_VERSION: str = "version"
FIELD_ARGUMENT_HINT: str = "argument-hint"
FIELD_USER_INVOCABLE: str = "user-invocable"

KNOWN_FRONTMATTER_KEYS: frozenset[str] = frozenset(
    {
        FIELD_NAME,
        FIELD_DESCRIPTION,
        FIELD_ALLOWED_TOOLS,
        FIELD_DISABLE_MODEL_INVOCATION,
        FIELD_MODEL,
        FIELD_LICENSE,
        FIELD_COMPATIBILITY,
        FIELD_METADATA,
        FIELD_VERSION,
        FIELD_ARGUMENT_HINT,
        FIELD_USER_INVOCABLE,
    }
)

BOOLEAN_FIELDS: tuple[str, ...] = (FIELD_DISABLE_MODEL_INVOCATION, FIELD_USER_INVOCABLE)
STRING_FIELDS: tuple[str, ...] = (FIELD_MODEL, FIELD_LICENSE, FIELD_COMPATIBILITY, FIELD_VERSION, FIELD_ARGUMENT_HINT)

# Lowercase alphanumeric segments joined by single hyphens.
NAME_PATTERN: Pattern[str] = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
NAME_ALLOWED_CHARS_PATTERN: Pattern[str] = re.compile(r"^[a-z0-9-]+$")
XML_TAG_PATTERN: Pattern[str] = re.compile(r"</?[A-Za-z][A-Za-z0-9_-]*(?:\s[^<>]*)?/?>")
TOOL_LIST_SPLIT_PATTERN: Pattern[str] = re.compile(r"[,\s]+")

DEFAULT_MAX_NAME_LENGTH: int = 64
DEFAULT_MAX_DESCRIPTION_LENGTH: int = 1024
MAX_COMPATIBILITY_LENGTH: int = 500
DEFAULT_RESERVED_NAME_WORDS: tuple[str, ...] = ("anthropic", "claude")
