"""Stable validation error codes and allowed-key sets for config validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # unreadable file or invalid YAML
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # invalid enum value
CFG007: str = "CFG007"  # value out of range
CFG008: str = "CFG008"  # contradictory rule toggles
CFG009: str = "CFG009"  # invalid nested mapping
CFG010: str = "CFG010"  # root directory not found

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {
        "skill_globs",
        "exclude_dirs",
        "max_file_mb",
        "max_body_lines",
        "max_name_length",
        "max_description_length",
        "reserved_name_words",
        "extra_frontmatter_keys",
        "recommended_sections",
        "require_name_matches_directory",
        "rules",
        "rule_overrides",
    }
)

ALLOWED_RULES_KEYS: frozenset[str] = frozenset({"enabled", "disabled"})

LIST_OF_STRINGS_KEYS: tuple[str, ...] = (
    "skill_globs",
    "exclude_dirs",
    "reserved_name_words",
    "extra_frontmatter_keys",
    "recommended_sections",
)

POSITIVE_INT_KEYS: tuple[str, ...] = (
    "max_file_mb",
    "max_body_lines",
    "max_name_length",
    "max_description_length",
)

BOOLEAN_KEYS: tuple[str, ...] = ("require_name_matches_directory",)
