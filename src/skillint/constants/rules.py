"""Rule identifiers and their default severities."""

from __future__ import annotations

FRONTMATTER_MISSING: str = "FRONTMATTER_MISSING"
FRONTMATTER_INVALID: str = "FRONTMATTER_INVALID"
FRONTMATTER_UNKNOWN_KEY: str = "FRONTMATTER_UNKNOWN_KEY"
NAME_MISSING: str = "NAME_MISSING"
NAME_FORMAT: str = "NAME_FORMAT"
NAME_TOO_LONG: str = "NAME_TOO_LONG"
NAME_RESERVED: str = "NAME_RESERVED"
NAME_DIRECTORY_MISMATCH: str = "NAME_DIRECTORY_MISMATCH"
NAME_DUPLICATE: str = "NAME_DUPLICATE"
DESCRIPTION_MISSING: str = "DESCRIPTION_MISSING"
DESCRIPTION_TOO_LONG: str = "DESCRIPTION_TOO_LONG"
DESCRIPTION_XML_TAGS: str = "DESCRIPTION_XML_TAGS"
ALLOWED_TOOLS_INVALID: str = "ALLOWED_TOOLS_INVALID"
FIELD_TYPE_INVALID: str = "FIELD_TYPE_INVALID"
BODY_EMPTY: str = "BODY_EMPTY"
BODY_TOO_LONG: str = "BODY_TOO_LONG"
SECTION_MISSING: str = "SECTION_MISSING"
LINK_BROKEN: str = "LINK_BROKEN"
LINK_OUTSIDE_SKILL: str = "LINK_OUTSIDE_SKILL"
SUPPORT_FILE_UNREFERENCED: str = "SUPPORT_FILE_UNREFERENCED"

DEFAULT_RULE_SEVERITIES: dict[str, str] = {
    FRONTMATTER_MISSING: "error",
    FRONTMATTER_INVALID: "error",
    FRONTMATTER_UNKNOWN_KEY: "warning",
    NAME_MISSING: "error",
    NAME_FORMAT: "error",
    NAME_TOO_LONG: "error",
    NAME_RESERVED: "error",
    NAME_DIRECTORY_MISMATCH: "warning",
    NAME_DUPLICATE: "error",
    DESCRIPTION_MISSING: "error",
    DESCRIPTION_TOO_LONG: "error",
    DESCRIPTION_XML_TAGS: "warning",
    ALLOWED_TOOLS_INVALID: "error",
    FIELD_TYPE_INVALID: "error",
    BODY_EMPTY: "warning",
    BODY_TOO_LONG: "warning",
    SECTION_MISSING: "info",
    LINK_BROKEN: "error",
    LINK_OUTSIDE_SKILL: "warning",
    SUPPORT_FILE_UNREFERENCED: "info",
}

ALL_RULE_IDS: tuple[str, ...] = tuple(sorted(DEFAULT_RULE_SEVERITIES))
