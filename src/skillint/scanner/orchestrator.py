"""Lint a skill corpus from discovery through report writing.

``lint_workspace`` is what the CLI calls.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from pathlib import Path

from skillint.config import SkillintConfig, load_config
from skillint.constants.reporting import VALID_OUTPUT_FORMATS
from skillint.constants.rules import ALL_RULE_IDS, FRONTMATTER_INVALID
from skillint.detectors import build_corpus_detectors, build_detectors
from skillint.detectors.common import dedupe_candidates, make_candidate
from skillint.exceptions import ConfigError, SkillParseError
from skillint.model import Evidence, Finding, FindingCandidate, LintResult, ParsedSkillDocument
from skillint.parsers import parse_skill_markdown_file
from skillint.reporting import OutputFilters, write_corpus_reports
from skillint.scanner.conversion import candidate_to_finding, finding_sort_key
from skillint.scanner.counts import rule_counts, severity_counts
from skillint.scanner.discovery import assign_unique_skill_names, discover_skill_files
from skillint.types import RuleToggleConfig, Severity
from skillint.utils import relative_posix

logger = logging.getLogger(__name__)

_WRITE_PROBE = ".skillint_write_probe"


def lint_workspace(
    *,
    root: Path,
    out: Path | None = None,
    config_path: Path | None = None,
    max_file_mb: int | None = None,
    only_rules: tuple[str, ...] | None = None,
    disable_rules: tuple[str, ...] | None = None,
    output_formats: tuple[str, ...] = ("json",),
    min_severity: Severity | None = None,
) -> LintResult:
    """Lint every skill document under *root*; write reports when *out* is given."""
    unknown_formats = sorted(set(output_formats) - VALID_OUTPUT_FORMATS)
    if unknown_formats:
        raise ConfigError(
            f"Unknown output format(s): {', '.join(unknown_formats)}. "
            f"Valid formats: {', '.join(sorted(VALID_OUTPUT_FORMATS))}"
        )

    started = time.perf_counter()
    root = root.resolve()
    if not root.is_dir():
        raise ConfigError(f"Lint root does not exist or is not a directory: {root}")
    if out is not None:
        out = _prepare_output_dir(out.resolve())

    config = apply_cli_overrides(
        load_config(root, config_path),
        max_file_mb=max_file_mb,
        only_rules=only_rules,
        disable_rules=disable_rules,
    )
    warnings: list[str] = []
    for rule_id in sorted(set(config.rule_overrides) - set(ALL_RULE_IDS)):
        _warn(warnings, f"Unknown rule_overrides entry '{rule_id}' has no matching rule and will be ignored.")

    skill_files = discover_skill_files(root, config.skill_globs, config.max_file_mb, config.exclude_dirs)
    logger.info("Discovered %d skill document(s) under %s", len(skill_files), root)

    names, collisions = assign_unique_skill_names(skill_files, root)
    for base_name, paths in sorted(collisions.items()):
        listed = ", ".join(relative_posix(path, root) for path in paths)
        _warn(
            warnings,
            f"Duplicate skill name '{base_name}' resolved across multiple files "
            f"({listed}); applying deterministic suffixes.",
        )

    paths_by_skill: dict[str, Path] = {}
    documents: dict[str, ParsedSkillDocument] = {}
    candidates: dict[str, list[FindingCandidate]] = {}
    per_document = build_detectors(config)
    for path in skill_files:
        skill_name = names[path]
        try:
            parsed = parse_skill_markdown_file(path)
        except SkillParseError as exc:
            logger.debug("Parse error in %s: %s", path, exc)
            paths_by_skill[skill_name] = path
            candidates[skill_name] = (
                [_parse_error_candidate(path, exc)] if config.is_rule_active(FRONTMATTER_INVALID) else []
            )
            continue
        except (OSError, UnicodeDecodeError) as exc:
            _warn(warnings, f"Failed to read {relative_posix(path, root)}: {exc}")
            continue
        paths_by_skill[skill_name] = path
        documents[skill_name] = parsed
        candidates[skill_name] = [
            candidate
            for detector in per_document
            for candidate in detector.run(skill_name=skill_name, parsed=parsed, config=config)
        ]

    for corpus_detector in build_corpus_detectors(config):
        for skill_name, extra in corpus_detector.run(root=root, documents=documents, config=config).items():
            candidates.setdefault(skill_name, []).extend(extra)

    findings_by_skill = {
        skill_name: _to_findings(skill_name, candidates[skill_name], config, root) for skill_name in sorted(candidates)
    }
    all_findings = [finding for findings in findings_by_skill.values() for finding in findings]

    if out is not None:
        write_corpus_reports(
            out,
            root=root,
            findings_by_skill=findings_by_skill,
            paths_by_skill=paths_by_skill,
            output_formats=output_formats,
            filters=OutputFilters(min_severity=min_severity),
        )

    return LintResult(
        scanned_files=len(skill_files),
        total_findings=len(all_findings),
        counts_by_severity=severity_counts(all_findings),
        findings=tuple(sorted(all_findings, key=finding_sort_key)),
        duration_seconds=time.perf_counter() - started,
        warnings=tuple(warnings),
        counts_by_rule=rule_counts(all_findings),
        rules_executed=config.active_rule_ids,
        skill_names=tuple(sorted(paths_by_skill)),
    )


def apply_cli_overrides(
    config: SkillintConfig,
    *,
    max_file_mb: int | None = None,
    only_rules: tuple[str, ...] | None = None,
    disable_rules: tuple[str, ...] | None = None,
) -> SkillintConfig:
    """Return *config* with command-line flags layered on top.

    ``only_rules`` replaces the enabled set; ``disable_rules`` adds to the
    disabled set. Unknown rule ids raise ``ConfigError``.
    """
    only = _normalize_rule_ids(only_rules)
    disable = _normalize_rule_ids(disable_rules)
    unknown = sorted((only | disable) - set(ALL_RULE_IDS))
    if unknown:
        raise ConfigError(f"Unknown rule id(s): {', '.join(unknown)}")

    if max_file_mb is not None:
        if max_file_mb <= 0:
            raise ConfigError("--max-file-mb must be a positive integer")
        config = replace(config, max_file_mb=max_file_mb)
    if only or disable:
        enabled = tuple(sorted(only)) if only else config.rules.enabled
        disabled = set(config.rules.disabled) | disable
        if only:
            disabled -= only
        config = replace(config, rules=RuleToggleConfig(enabled=enabled, disabled=tuple(sorted(disabled))))
    return config


def _normalize_rule_ids(rule_ids: tuple[str, ...] | None) -> set[str]:
    return {rule_id.strip().upper() for rule_id in rule_ids or () if rule_id.strip()}


def _prepare_output_dir(out: Path) -> Path:
    try:
        out.mkdir(parents=True, exist_ok=True)
        probe = out / _WRITE_PROBE
        probe.touch()
        probe.unlink()
    except OSError as exc:
        raise ConfigError(f"Output directory is not writable: {out} ({exc})") from exc
    return out


def _to_findings(
    skill_name: str,
    candidates: list[FindingCandidate],
    config: SkillintConfig,
    root: Path,
) -> list[Finding]:
    """Convert candidates to findings whose evidence paths are relative to *root*."""
    portable = []
    for candidate in candidates:
        path = relative_posix(Path(candidate.evidence.path), root)
        portable.append(replace(candidate, evidence=replace(candidate.evidence, path=path)))
    return [
        candidate_to_finding(skill_name, candidate, rule_override=config.rule_overrides.get(candidate.rule_id))
        for candidate in dedupe_candidates(portable)
    ]


def _parse_error_candidate(path: Path, exc: SkillParseError) -> FindingCandidate:
    return make_candidate(
        FRONTMATTER_INVALID,
        title="Invalid frontmatter",
        description=str(exc),
        evidence=Evidence(path=str(path), line=1, snippet="---"),
        recommendation="Close the frontmatter with `---` and make it a valid YAML mapping.",
    )


def _warn(warnings: list[str], message: str) -> None:
    warnings.append(message)
    logger.warning(message)
