"""Detectors for the YAML frontmatter contract of SKILL.md files."""

from __future__ import annotations

from typing import Any

from skillint.config import SkillintConfig, suggest_key
from skillint.constants.frontmatter import (
    BOOLEAN_FIELDS,
    FIELD_ALLOWED_TOOLS,
    FIELD_COMPATIBILITY,
    FIELD_DESCRIPTION,
    FIELD_METADATA,
    FIELD_NAME,
    MAX_COMPATIBILITY_LENGTH,
    NAME_ALLOWED_CHARS_PATTERN,
    NAME_PATTERN,
    STRING_FIELDS,
    TOOL_LIST_SPLIT_PATTERN,
    XML_TAG_PATTERN,
)
from skillint.constants.rules import (
    ALLOWED_TOOLS_INVALID,
    DESCRIPTION_MISSING,
    DESCRIPTION_TOO_LONG,
    DESCRIPTION_XML_TAGS,
    FIELD_TYPE_INVALID,
    FRONTMATTER_MISSING,
    FRONTMATTER_UNKNOWN_KEY,
    NAME_DIRECTORY_MISMATCH,
    NAME_FORMAT,
    NAME_MISSING,
    NAME_RESERVED,
    NAME_TOO_LONG,
)
from skillint.detectors.base import Detector
from skillint.detectors.common import frontmatter_evidence, make_candidate
from skillint.model import FindingCandidate, ParsedSkillDocument


def declared_string(parsed: ParsedSkillDocument, key: str) -> str | None:
    """Return the stripped string value of a frontmatter key, or None when absent/blank/non-string."""
    if not isinstance(parsed.frontmatter, dict):
        return None
    value = parsed.frontmatter.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class FrontmatterMissingDetector(Detector):
    """Require a leading, non-empty YAML frontmatter block."""

    rule_id = FRONTMATTER_MISSING

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        if parsed.frontmatter is not None:
            return []
        if parsed.frontmatter_present:
            description = "The frontmatter block is empty."
        else:
            description = "The document does not start with a `---` delimited YAML frontmatter block."
        return [
            make_candidate(
                self.rule_id,
                title="Missing frontmatter",
                description=description,
                evidence=frontmatter_evidence(parsed),
                recommendation="Start SKILL.md with a `---` block declaring at least `name` and `description`.",
            )
        ]


class FrontmatterUnknownKeyDetector(Detector):
    """Flag keys the agent runtime does not recognize."""

    rule_id = FRONTMATTER_UNKNOWN_KEY

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        if not isinstance(parsed.frontmatter, dict):
            return []
        known = config.known_frontmatter_keys
        findings: list[FindingCandidate] = []
        for key in sorted(parsed.frontmatter, key=str):
            key_text = str(key)
            if key_text in known:
                continue
            hint = suggest_key(key_text, known)
            findings.append(
                make_candidate(
                    self.rule_id,
                    title="Unknown frontmatter key",
                    description=f"Frontmatter key `{key_text}` is not recognized and will be ignored.",
                    evidence=frontmatter_evidence(parsed, key_text),
                    recommendation=(
                        f"Remove or rename `{key_text}`; {hint}"
                        if hint
                        else f"Remove `{key_text}` or list it under `extra_frontmatter_keys`."
                    ),
                )
            )
        return findings


class NameMissingDetector(Detector):
    """Require a non-empty string ``name``."""

    rule_id = NAME_MISSING

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        if not isinstance(parsed.frontmatter, dict) or declared_string(parsed, FIELD_NAME) is not None:
            return []
        return [
            make_candidate(
                self.rule_id,
                title="Missing skill name",
                description=_missing_description(parsed.frontmatter, FIELD_NAME),
                evidence=frontmatter_evidence(parsed, FIELD_NAME),
                recommendation="Declare `name:` with a short lowercase, hyphenated identifier.",
            )
        ]


class NameFormatDetector(Detector):
    """Restrict ``name`` to lowercase letters, digits, and single hyphens."""

    rule_id = NAME_FORMAT

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        name = declared_string(parsed, FIELD_NAME)
        if name is None or NAME_PATTERN.match(name):
            return []
        if NAME_ALLOWED_CHARS_PATTERN.match(name):
            description = f"Skill name '{name}' starts or ends with a hyphen or contains consecutive hyphens."
        else:
            description = f"Skill name '{name}' may only contain lowercase letters, digits, and hyphens."
        return [
            make_candidate(
                self.rule_id,
                title="Invalid skill name format",
                description=description,
                evidence=frontmatter_evidence(parsed, FIELD_NAME),
                recommendation="Use lowercase words separated by single hyphens, e.g. `rust-patterns`.",
            )
        ]


class NameTooLongDetector(Detector):
    """Cap ``name`` length."""

    rule_id = NAME_TOO_LONG

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        name = declared_string(parsed, FIELD_NAME)
        if name is None or len(name) <= config.max_name_length:
            return []
        return [
            make_candidate(
                self.rule_id,
                title="Skill name too long",
                description=(f"Skill name is {len(name)} characters; the limit is {config.max_name_length}."),
                evidence=frontmatter_evidence(parsed, FIELD_NAME),
                recommendation="Shorten the name to a concise identifier.",
            )
        ]


class NameReservedDetector(Detector):
    """Reject names containing words reserved by the platform."""

    rule_id = NAME_RESERVED

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        name = declared_string(parsed, FIELD_NAME)
        if name is None:
            return []
        lowered = name.lower()
        hits = [word for word in config.reserved_name_words if word in lowered]
        if not hits:
            return []
        return [
            make_candidate(
                self.rule_id,
                title="Reserved word in skill name",
                description=f"Skill name '{name}' contains reserved word(s): {', '.join(hits)}.",
                evidence=frontmatter_evidence(parsed, FIELD_NAME),
                recommendation="Pick a name that does not include reserved platform words.",
            )
        ]


class NameDirectoryMismatchDetector(Detector):
    """Expect the declared name to match the skill's directory."""

    rule_id = NAME_DIRECTORY_MISMATCH

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        if not config.require_name_matches_directory:
            return []
        name = declared_string(parsed, FIELD_NAME)
        directory = parsed.skill_dir.name
        if name is None or name == directory:
            return []
        return [
            make_candidate(
                self.rule_id,
                title="Skill name does not match directory",
                description=f"Skill name '{name}' differs from its directory '{directory}'.",
                evidence=frontmatter_evidence(parsed, FIELD_NAME),
                recommendation=f"Rename the directory or set `name: {directory}`.",
            )
        ]


class DescriptionMissingDetector(Detector):
    """Require a non-empty ``description``; the runtime uses it to decide when to load the skill."""

    rule_id = DESCRIPTION_MISSING

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        if not isinstance(parsed.frontmatter, dict) or declared_string(parsed, FIELD_DESCRIPTION) is not None:
            return []
        return [
            make_candidate(
                self.rule_id,
                title="Missing skill description",
                description=_missing_description(parsed.frontmatter, FIELD_DESCRIPTION),
                evidence=frontmatter_evidence(parsed, FIELD_DESCRIPTION),
                recommendation="Describe what the skill does and when it should be used.",
            )
        ]


class DescriptionTooLongDetector(Detector):
    """Cap ``description`` length."""

    rule_id = DESCRIPTION_TOO_LONG

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        description = declared_string(parsed, FIELD_DESCRIPTION)
        if description is None or len(description) <= config.max_description_length:
            return []
        return [
            make_candidate(
                self.rule_id,
                title="Skill description too long",
                description=(
                    f"Description is {len(description)} characters; "
                    f"the limit is {config.max_description_length}."
                ),
                evidence=frontmatter_evidence(parsed, FIELD_DESCRIPTION),
                recommendation="Keep the description to the trigger conditions; move detail into the body.",
            )
        ]


class DescriptionXmlTagsDetector(Detector):
    """Flag markup tags inside ``description``."""

    rule_id = DESCRIPTION_XML_TAGS

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        description = declared_string(parsed, FIELD_DESCRIPTION)
        if description is None:
            return []
        tags = sorted(set(XML_TAG_PATTERN.findall(description)))
        if not tags:
            return []
        return [
            make_candidate(
                self.rule_id,
                title="Markup in skill description",
                description=f"Description contains tag markup: {', '.join(tags)}.",
                evidence=frontmatter_evidence(parsed, FIELD_DESCRIPTION),
                recommendation="Use plain text in the description.",
            )
        ]


class AllowedToolsDetector(Detector):
    """Validate the shape of ``allowed-tools``."""

    rule_id = ALLOWED_TOOLS_INVALID

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        if not isinstance(parsed.frontmatter, dict) or FIELD_ALLOWED_TOOLS not in parsed.frontmatter:
            return []
        problem = _allowed_tools_problem(parsed.frontmatter[FIELD_ALLOWED_TOOLS])
        if problem is None:
            return []
        return [
            make_candidate(
                self.rule_id,
                title="Invalid allowed-tools",
                description=problem,
                evidence=frontmatter_evidence(parsed, FIELD_ALLOWED_TOOLS),
                recommendation="List tool names as a YAML sequence, e.g. `allowed-tools: [Read, Grep]`.",
            )
        ]


class FieldTypeDetector(Detector):
    """Type-check the optional recognized frontmatter keys."""

    rule_id = FIELD_TYPE_INVALID

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        if not isinstance(parsed.frontmatter, dict):
            return []
        findings: list[FindingCandidate] = []
        for key in sorted(parsed.frontmatter, key=str):
            problem = _field_type_problem(str(key), parsed.frontmatter[key])
            if problem is None:
                continue
            findings.append(
                make_candidate(
                    self.rule_id,
                    title="Invalid frontmatter value",
                    description=problem,
                    evidence=frontmatter_evidence(parsed, str(key)),
                    recommendation=f"Fix the value of `{key}`.",
                )
            )
        return findings


FRONTMATTER_DETECTOR_CLASSES: tuple[type[Detector], ...] = (
    FrontmatterMissingDetector,
    FrontmatterUnknownKeyDetector,
    NameMissingDetector,
    NameFormatDetector,
    NameTooLongDetector,
    NameReservedDetector,
    NameDirectoryMismatchDetector,
    DescriptionMissingDetector,
    DescriptionTooLongDetector,
    DescriptionXmlTagsDetector,
    AllowedToolsDetector,
    FieldTypeDetector,
)


def _missing_description(frontmatter: dict[str, Any], key: str) -> str:
    if key not in frontmatter or frontmatter[key] is None:
        return f"Frontmatter has no `{key}` field."
    if not isinstance(frontmatter[key], str):
        return f"`{key}` must be a string, got {type(frontmatter[key]).__name__}."
    return f"`{key}` is blank."


def _allowed_tools_problem(value: Any) -> str | None:
    if isinstance(value, str):
        if not TOOL_LIST_SPLIT_PATTERN.sub("", value):
            return "`allowed-tools` is an empty string."
        return None
    if isinstance(value, list):
        bad = [item for item in value if not isinstance(item, str) or not item.strip()]
        if bad:
            return f"`allowed-tools` entries must be non-empty strings; found {bad!r}."
        return None
    return f"`allowed-tools` must be a list of tool names, got {type(value).__name__}."


def _field_type_problem(key: str, value: Any) -> str | None:
    if key in BOOLEAN_FIELDS and not isinstance(value, bool):
        return f"`{key}` must be a boolean, got {type(value).__name__}."
    if key in STRING_FIELDS:
        if not isinstance(value, str) or not value.strip():
            return f"`{key}` must be a non-empty string."
        if key == FIELD_COMPATIBILITY and len(value) > MAX_COMPATIBILITY_LENGTH:
            return f"`{key}` is {len(value)} characters; the limit is {MAX_COMPATIBILITY_LENGTH}."
    if key == FIELD_METADATA:
        if not isinstance(value, dict):
            return f"`{key}` must be a mapping, got {type(value).__name__}."
        bad_keys = sorted(str(k) for k, v in value.items() if not isinstance(k, str) or not isinstance(v, str))
        if bad_keys:
            return f"`{key}` must map strings to strings; offending entries: {', '.join(bad_keys)}."
    return None
