"""Detectors for the Markdown body and the skill directory layout."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from urllib.parse import unquote

from skillint.config import SkillintConfig
from skillint.constants.body import SUPPORT_DIRECTORIES
from skillint.constants.rules import (
    BODY_EMPTY,
    BODY_TOO_LONG,
    LINK_BROKEN,
    LINK_OUTSIDE_SKILL,
    SECTION_MISSING,
    SUPPORT_FILE_UNREFERENCED,
)
from skillint.detectors.base import Detector
from skillint.detectors.common import dedupe_candidates, line_evidence, make_candidate
from skillint.model import DocumentLink, Evidence, FindingCandidate, ParsedSkillDocument

logger = logging.getLogger(__name__)


def resolve_link(parsed: ParsedSkillDocument, link: DocumentLink) -> Path | None:
    """Resolve a relative link target against the skill directory.

    Returns None when the decoded target cannot name a file, such as one
    containing an escaped NUL byte.
    """
    try:
        return (parsed.skill_dir / unquote(link.target)).resolve()
    except (OSError, ValueError) as exc:
        logger.debug("Unresolvable link target %r in %s: %s", link.target, parsed.file_path, exc)
        return None


def _existing_target(parsed: ParsedSkillDocument, link: DocumentLink) -> Path | None:
    target = resolve_link(parsed, link)
    try:
        return target if target is not None and target.exists() else None
    except (OSError, ValueError):
        return None


def mentions_path(text: str, relative: str) -> bool:
    """True when *relative* appears in *text* as a whole path, not as a prefix of a longer one."""
    pattern = r"(?<![\w.-])(?<![\w-]/)" + re.escape(relative) + r"(?![\w/-])(?!\.\w)"
    return re.search(pattern, text) is not None


class BodyEmptyDetector(Detector):
    """Require instructions after the frontmatter."""

    rule_id = BODY_EMPTY

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        if parsed.body:
            return []
        return [
            make_candidate(
                self.rule_id,
                title="Empty skill body",
                description="SKILL.md has no instructions after the frontmatter.",
                evidence=line_evidence(parsed, parsed.body_start_line, snippet=""),
                recommendation="Add an overview and step-by-step instructions.",
            )
        ]


class BodyTooLongDetector(Detector):
    """Keep the primary instructions short; detail belongs in ``references/``."""

    rule_id = BODY_TOO_LONG

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        if parsed.body_line_count <= config.max_body_lines:
            return []
        return [
            make_candidate(
                self.rule_id,
                title="Skill body too long",
                description=(
                    f"Body has {parsed.body_line_count} lines; the recommended ceiling is {config.max_body_lines}."
                ),
                evidence=line_evidence(parsed, parsed.body_start_line + config.max_body_lines),
                recommendation="Move reference material into `references/` and link to it from SKILL.md.",
            )
        ]


class SectionMissingDetector(Detector):
    """Check for the conventional Overview / Instructions / Examples headings."""

    rule_id = SECTION_MISSING

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        if not parsed.body:
            return []
        titles = {heading.title.strip().casefold() for heading in parsed.headings}
        findings: list[FindingCandidate] = []
        for section in config.recommended_sections:
            if section.casefold() in titles:
                continue
            findings.append(
                make_candidate(
                    self.rule_id,
                    title="Recommended section missing",
                    description=f"No `{section}` heading found in the body.",
                    evidence=line_evidence(parsed, parsed.body_start_line, snippet=""),
                    recommendation=f"Add a `## {section}` section.",
                )
            )
        return findings


class LinkBrokenDetector(Detector):
    """Relative links must resolve to files shipped with the skill."""

    rule_id = LINK_BROKEN

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        findings: list[FindingCandidate] = []
        for link in parsed.links:
            if _existing_target(parsed, link) is not None:
                continue
            findings.append(
                make_candidate(
                    self.rule_id,
                    title="Broken relative link",
                    description=f"Link target '{link.target}' does not exist.",
                    evidence=line_evidence(parsed, link.line, snippet=link.snippet),
                    recommendation="Fix the path or add the missing file.",
                )
            )
        return dedupe_candidates(findings)


class LinkOutsideSkillDetector(Detector):
    """Relative links should stay inside the skill directory."""

    rule_id = LINK_OUTSIDE_SKILL

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        skill_dir = parsed.skill_dir.resolve()
        findings: list[FindingCandidate] = []
        for link in parsed.links:
            target = _existing_target(parsed, link)
            if target is None or target.is_relative_to(skill_dir):
                continue
            findings.append(
                make_candidate(
                    self.rule_id,
                    title="Link leaves the skill directory",
                    description=f"Link target '{link.target}' resolves outside the skill directory.",
                    evidence=line_evidence(parsed, link.line, snippet=link.snippet),
                    recommendation="Copy the referenced file into the skill's `references/` or `assets/`.",
                )
            )
        return dedupe_candidates(findings)


class SupportFileUnreferencedDetector(Detector):
    """Files under scripts/, references/, assets/ should be reachable from SKILL.md."""

    rule_id = SUPPORT_FILE_UNREFERENCED

    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]:
        skill_dir = parsed.skill_dir.resolve()
        linked = {target for link in parsed.links if (target := resolve_link(parsed, link)) is not None}

        findings: list[FindingCandidate] = []
        for support_file in _support_files(skill_dir):
            relative = support_file.relative_to(skill_dir).as_posix()
            if mentions_path(parsed.raw_text, relative):
                continue
            if support_file in linked or any(parent in linked for parent in support_file.parents):
                continue
            findings.append(
                make_candidate(
                    self.rule_id,
                    title="Unreferenced supporting file",
                    description=f"'{relative}' is never referenced from SKILL.md.",
                    evidence=Evidence(path=str(support_file), line=None, snippet=relative),
                    recommendation="Link the file from SKILL.md so the agent knows when to load it, or delete it.",
                )
            )
        return findings


BODY_DETECTOR_CLASSES: tuple[type[Detector], ...] = (
    BodyEmptyDetector,
    BodyTooLongDetector,
    SectionMissingDetector,
    LinkBrokenDetector,
    LinkOutsideSkillDetector,
    SupportFileUnreferencedDetector,
)


def _support_files(skill_dir: Path) -> list[Path]:
    files: list[Path] = []
    for directory_name in SUPPORT_DIRECTORIES:
        directory = skill_dir / directory_name
        if not directory.is_dir():
            continue
        for path in sorted(directory.rglob("*")):
            if not path.is_file():
                continue
            if any(part.startswith(".") for part in path.relative_to(skill_dir).parts):
                continue
            files.append(path.resolve())
    logger.debug("Found %d supporting files under %s", len(files), skill_dir)
    return files
