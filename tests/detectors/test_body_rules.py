"""Tests for body and directory layout detectors."""

from __future__ import annotations

from pathlib import Path

import pytest

from skillint.config import SkillintConfig
from skillint.detectors.base import Detector
from skillint.detectors.body import (
    BodyEmptyDetector,
    BodyTooLongDetector,
    LinkBrokenDetector,
    LinkOutsideSkillDetector,
    SectionMissingDetector,
    SupportFileUnreferencedDetector,
    mentions_path,
)
from skillint.model import FindingCandidate
from skillint.parsers import parse_skill_markdown_file
from tests.helpers import VALID_BODY, valid_frontmatter, write_skill


def _run(
    detector_cls: type[Detector],
    path: Path,
    config: SkillintConfig | None = None,
) -> list[FindingCandidate]:
    parsed = parse_skill_markdown_file(path)
    return detector_cls().run(skill_name=path.parent.name, parsed=parsed, config=config or SkillintConfig())


def test_body_empty(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill"), body="\n\n")

    findings = _run(BodyEmptyDetector, path)

    assert len(findings) == 1
    assert findings[0].severity == "warning"
    assert findings[0].evidence.line == 5


def test_body_too_long_points_past_the_limit(tmp_path: Path) -> None:
    body = "\n".join(f"line {index}" for index in range(12)) + "\n"
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill"), body=body)

    assert _run(BodyTooLongDetector, path) == []

    findings = _run(BodyTooLongDetector, path, SkillintConfig(max_body_lines=10))

    assert len(findings) == 1
    assert "12 lines" in findings[0].description
    assert findings[0].evidence.line == 15
    assert findings[0].evidence.snippet == "line 10"


def test_section_missing_is_case_insensitive(tmp_path: Path) -> None:
    body = "# Skill\n\n## overview\n\n## INSTRUCTIONS\n"
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill"), body=body)

    findings = _run(SectionMissingDetector, path)

    assert [finding.description for finding in findings] == ["No `Examples` heading found in the body."]
    assert findings[0].severity == "info"


def test_section_missing_skips_empty_body_and_honours_config(tmp_path: Path) -> None:
    empty = write_skill(tmp_path, "empty", valid_frontmatter("empty"), body="")
    custom = write_skill(tmp_path, "custom", valid_frontmatter("custom"), body="# Custom\n\n## Usage\n")

    assert _run(SectionMissingDetector, empty) == []
    assert _run(SectionMissingDetector, custom, SkillintConfig(recommended_sections=("Usage",))) == []
    assert _run(SectionMissingDetector, custom, SkillintConfig(recommended_sections=())) == []


def test_link_broken_reports_missing_targets_once_per_line(tmp_path: Path) -> None:
    body = VALID_BODY + "\nSee [a](references/missing.md) and [a](references/missing.md).\n[ok](references/ok.md)\n"
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill"), body=body)
    (path.parent / "references").mkdir()
    (path.parent / "references" / "ok.md").write_text("ok\n", encoding="utf-8")

    findings = _run(LinkBrokenDetector, path)

    assert len(findings) == 1
    assert findings[0].severity == "error"
    assert "references/missing.md" in findings[0].description
    assert findings[0].evidence.snippet.startswith("See [a]")


def test_link_broken_decodes_percent_escapes(tmp_path: Path) -> None:
    body = VALID_BODY + "[spec](references/api%20spec.md)\n"
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill"), body=body)
    (path.parent / "references").mkdir()
    (path.parent / "references" / "api spec.md").write_text("spec\n", encoding="utf-8")

    assert _run(LinkBrokenDetector, path) == []


def test_link_with_escaped_nul_byte_is_broken(tmp_path: Path) -> None:
    body = VALID_BODY + "[x](references/a%00b.md)\n"
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill"), body=body)

    findings = _run(LinkBrokenDetector, path)

    assert [finding.rule_id for finding in findings] == ["LINK_BROKEN"]
    assert "references/a%00b.md" in findings[0].description
    assert _run(LinkOutsideSkillDetector, path) == []


def test_link_outside_skill_only_flags_existing_escapes(tmp_path: Path) -> None:
    (tmp_path / "shared.md").write_text("shared\n", encoding="utf-8")
    body = VALID_BODY + "[shared](../shared.md)\n[gone](../gone.md)\n"
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill"), body=body)

    findings = _run(LinkOutsideSkillDetector, path)

    assert len(findings) == 1
    assert "../shared.md" in findings[0].description
    assert findings[0].severity == "warning"


def test_support_file_unreferenced(tmp_path: Path) -> None:
    body = VALID_BODY + "\nRun `scripts/run.sh` and read [the docs](references/).\n"
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill"), body=body)
    skill_dir = path.parent
    for relative in ("scripts/run.sh", "references/a.md", "references/deep/b.md", "assets/logo.png", "assets/.hidden"):
        target = skill_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("x\n", encoding="utf-8")

    findings = _run(SupportFileUnreferencedDetector, path)

    assert [finding.evidence.snippet for finding in findings] == ["assets/logo.png"]
    assert findings[0].evidence.line is None
    assert findings[0].evidence.path.endswith("logo.png")
    assert findings[0].severity == "info"


def test_support_file_detector_without_support_dirs(tmp_path: Path) -> None:
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill"))

    assert _run(SupportFileUnreferencedDetector, path) == []


def test_support_file_named_as_prefix_of_mentioned_file_is_unreferenced(tmp_path: Path) -> None:
    body = VALID_BODY + "\nRun `scripts/run.py` first.\n"
    path = write_skill(tmp_path, "skill", valid_frontmatter("skill"), body=body)
    for relative in ("scripts/run.py", "scripts/run"):
        target = path.parent / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("x\n", encoding="utf-8")

    findings = _run(SupportFileUnreferencedDetector, path)

    assert [finding.evidence.snippet for finding in findings] == ["scripts/run"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Run `scripts/run` now.", True),
        ("See ./scripts/run for details.", True),
        ("Finish with scripts/run.", True),
        ("Run scripts/run.py now.", False),
        ("Run scripts/run-all now.", False),
        ("Run other/scripts/run now.", False),
        ("Run myscripts/run now.", False),
    ],
)
def test_mentions_path_requires_whole_path(text: str, expected: bool) -> None:
    assert mentions_path(text, "scripts/run") is expected
