"""Tests for frontmatter contract detectors."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillint.config import SkillintConfig
from skillint.detectors.base import Detector
from skillint.detectors.frontmatter import (
    AllowedToolsDetector,
    DescriptionMissingDetector,
    DescriptionTooLongDetector,
    DescriptionXmlTagsDetector,
    FieldTypeDetector,
    FrontmatterMissingDetector,
    FrontmatterUnknownKeyDetector,
    NameDirectoryMismatchDetector,
    NameFormatDetector,
    NameMissingDetector,
    NameReservedDetector,
    NameTooLongDetector,
)
from skillint.model import FindingCandidate
from skillint.parsers import parse_skill_markdown_file
from tests.helpers import valid_frontmatter, write_skill


def _run(
    detector_cls: type[Detector],
    path: Path,
    config: SkillintConfig | None = None,
) -> list[FindingCandidate]:
    parsed = parse_skill_markdown_file(path)
    return detector_cls().run(skill_name=path.parent.name, parsed=parsed, config=config or SkillintConfig())


def test_valid_skill_passes_every_frontmatter_detector(tmp_path: Path) -> None:
    path = write_skill(
        tmp_path,
        "pdf-tools",
        "name: pdf-tools\n"
        "description: Extract text from PDFs. Use when the user mentions PDF files.\n"
        "allowed-tools: [Read, Bash]\n"
        "disable-model-invocation: true\n"
        "license: MIT\n"
        "metadata:\n"
        "  owner: docs-team\n",
    )

    for detector_cls in (
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
    ):
        assert _run(detector_cls, path) == [], detector_cls.__name__


def test_frontmatter_missing_flags_documents_without_block(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "no-frontmatter")

    findings = _run(FrontmatterMissingDetector, path)

    assert len(findings) == 1
    assert findings[0].severity == "error"
    assert findings[0].evidence.line == 1
    assert "does not start" in findings[0].description


def test_frontmatter_missing_flags_empty_block(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "empty-frontmatter", "")

    findings = _run(FrontmatterMissingDetector, path)

    assert len(findings) == 1
    assert "empty" in findings[0].description


def test_field_detectors_stay_quiet_without_frontmatter(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "no-frontmatter")

    assert _run(NameMissingDetector, path) == []
    assert _run(DescriptionMissingDetector, path) == []


def test_unknown_key_suggests_close_match(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "typo", valid_frontmatter("typo") + "allowed_tools: [Read]\n")

    findings = _run(FrontmatterUnknownKeyDetector, path)

    assert len(findings) == 1
    assert findings[0].severity == "warning"
    assert findings[0].evidence.line == 4
    assert "`allowed-tools`" in findings[0].recommendation


def test_unknown_key_respects_extra_frontmatter_keys(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "custom", valid_frontmatter("custom") + "owner: platform\n")

    assert len(_run(FrontmatterUnknownKeyDetector, path)) == 1
    assert _run(FrontmatterUnknownKeyDetector, path, SkillintConfig(extra_frontmatter_keys=("owner",))) == []


@pytest.mark.parametrize(
    "frontmatter, expected",
    [
        ("description: d\n", "no `name` field"),
        ("name:\ndescription: d\n", "no `name` field"),
        ("name: '  '\ndescription: d\n", "blank"),
        ("name: 42\ndescription: d\n", "must be a string"),
    ],
)
def test_name_missing_variants(tmp_path: Path, frontmatter: str, expected: str) -> None:
    path = write_skill(tmp_path, "skill", frontmatter)

    findings = _run(NameMissingDetector, path)

    assert len(findings) == 1
    assert expected in findings[0].description


@pytest.mark.parametrize(
    "name, expected",
    [
        ("PDF-Tools", "may only contain"),
        ("pdf_tools", "may only contain"),
        ("-pdf", "starts or ends"),
        ("pdf--tools", "consecutive hyphens"),
    ],
)
def test_name_format_rejects_invalid_names(tmp_path: Path, name: str, expected: str) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter(f"'{name}'"))

    findings = _run(NameFormatDetector, path)

    assert len(findings) == 1
    assert expected in findings[0].description
    assert findings[0].evidence.line == 2


def test_name_format_accepts_digits_and_hyphens(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter("s3-sync-v2"))

    assert _run(NameFormatDetector, path) == []


def test_name_too_long_uses_configured_limit(tmp_path: Path) -> None:
    long_name = "a" * 65
    path = write_skill(tmp_path, "skill", valid_frontmatter(long_name))

    findings = _run(NameTooLongDetector, path)

    assert len(findings) == 1
    assert "65 characters" in findings[0].description
    assert _run(NameTooLongDetector, path, SkillintConfig(max_name_length=80)) == []


def test_name_at_limit_is_accepted(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter("a" * 64))

    assert _run(NameTooLongDetector, path) == []


def test_name_reserved_reports_every_hit(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "claude-helper", valid_frontmatter("claude-anthropic-helper"))

    findings = _run(NameReservedDetector, path)

    assert len(findings) == 1
    assert "claude" in findings[0].description
    assert "anthropic" in findings[0].description


def test_name_reserved_words_are_configurable(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "acme-tools", valid_frontmatter("acme-tools"))

    assert _run(NameReservedDetector, path) == []
    assert len(_run(NameReservedDetector, path, SkillintConfig(reserved_name_words=("acme",)))) == 1


def test_name_directory_mismatch(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "pdf-tools", valid_frontmatter("pdf-helper"))

    findings = _run(NameDirectoryMismatchDetector, path)

    assert len(findings) == 1
    assert findings[0].severity == "warning"
    assert "'pdf-tools'" in findings[0].description
    assert _run(NameDirectoryMismatchDetector, path, SkillintConfig(require_name_matches_directory=False)) == []


def test_description_missing(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "skill", "name: skill\n")

    findings = _run(DescriptionMissingDetector, path)

    assert len(findings) == 1
    assert findings[0].evidence.line == 1


def test_description_too_long(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill", "x" * 1025))

    findings = _run(DescriptionTooLongDetector, path)

    assert len(findings) == 1
    assert "1025 characters" in findings[0].description
    assert findings[0].evidence.line == 3


def test_description_xml_tags(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill", "'Use <b>always</b> for 3 < 4 cases.'"))

    findings = _run(DescriptionXmlTagsDetector, path)

    assert len(findings) == 1
    assert "<b>" in findings[0].description
    assert "</b>" in findings[0].description


@pytest.mark.parametrize(
    "value",
    ["[Read, Grep]", "Read, Grep", "Read Grep", "\n  - Read\n  - Bash(git:*)"],
)
def test_allowed_tools_accepts_lists_and_strings(tmp_path: Path, value: str) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill") + f"allowed-tools: {value}\n")

    assert _run(AllowedToolsDetector, path) == []


@pytest.mark.parametrize(
    "value, expected",
    [
        ("''", "empty string"),
        ("", "got NoneType"),
        ("42", "got int"),
        ("[Read, 3]", "non-empty strings"),
        ("{Read: true}", "got dict"),
    ],
)
def test_allowed_tools_rejects_bad_shapes(tmp_path: Path, value: str, expected: str) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill") + f"allowed-tools: {value}\n")

    findings = _run(AllowedToolsDetector, path)

    assert len(findings) == 1
    assert expected in findings[0].description
    assert findings[0].evidence.line == 4


@pytest.mark.parametrize(
    "line, expected",
    [
        ("disable-model-invocation: 'yes'", "must be a boolean"),
        ("user-invocable: 1", "must be a boolean"),
        ("model: ''", "non-empty string"),
        ("license: [MIT]", "non-empty string"),
        ("metadata: owner", "must be a mapping"),
        ("metadata: {owner: 1}", "offending entries: owner"),
    ],
)
def test_field_type_invalid(tmp_path: Path, line: str, expected: str) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill") + line + "\n")

    findings = _run(FieldTypeDetector, path)

    assert len(findings) == 1
    assert expected in findings[0].description


def test_compatibility_length_is_capped(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill") + f"compatibility: {'c' * 501}\n")

    findings = _run(FieldTypeDetector, path)

    assert len(findings) == 1
    assert "limit is 500" in findings[0].description
