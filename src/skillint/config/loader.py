"""Read ``skillint.yaml`` into a ``SkillintConfig``."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from skillint.config.model import SkillintConfig
from skillint.constants.body import DEFAULT_MAX_BODY_LINES, DEFAULT_RECOMMENDED_SECTIONS
from skillint.constants.config import CONFIG_FILENAME, DEFAULT_MAX_FILE_MB, DEFAULT_SKILL_GLOBS
from skillint.constants.discovery import DEFAULT_EXCLUDE_DIRS
from skillint.constants.frontmatter import (
    DEFAULT_MAX_DESCRIPTION_LENGTH,
    DEFAULT_MAX_NAME_LENGTH,
    DEFAULT_RESERVED_NAME_WORDS,
)
from skillint.constants.scoring import VALID_SEVERITIES
from skillint.exceptions import ConfigError
from skillint.types import RuleOverrideConfig, RuleToggleConfig

logger = logging.getLogger(__name__)


def load_config(root: Path, config_path: Path | None = None) -> SkillintConfig:
    """Load config from *config_path*, or ``<root>/skillint.yaml`` when it exists.

    A missing default file yields the built-in defaults; a missing explicit
    file is a ``ConfigError``.
    """
    path = config_path.resolve() if config_path else root.resolve() / CONFIG_FILENAME
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return SkillintConfig()

    logger.debug("Loading config from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file at {path}: {exc}") from exc
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")
    return _build_config(raw)


def _build_config(raw: dict[str, Any]) -> SkillintConfig:
    rules = raw.get("rules")
    if rules is None:
        rules = {}
    if not isinstance(rules, dict):
        raise ConfigError("rules must be a mapping")
    require_match = raw.get("require_name_matches_directory", True)
    if not isinstance(require_match, bool):
        raise ConfigError("require_name_matches_directory must be a boolean")

    return SkillintConfig(
        skill_globs=_strings(raw, "skill_globs", DEFAULT_SKILL_GLOBS, strip=False),
        exclude_dirs=_strings(raw, "exclude_dirs", DEFAULT_EXCLUDE_DIRS, strip=False),
        max_file_mb=_positive_int(raw, "max_file_mb", DEFAULT_MAX_FILE_MB),
        max_body_lines=_positive_int(raw, "max_body_lines", DEFAULT_MAX_BODY_LINES),
        max_name_length=_positive_int(raw, "max_name_length", DEFAULT_MAX_NAME_LENGTH),
        max_description_length=_positive_int(raw, "max_description_length", DEFAULT_MAX_DESCRIPTION_LENGTH),
        reserved_name_words=tuple(
            word.lower() for word in _strings(raw, "reserved_name_words", DEFAULT_RESERVED_NAME_WORDS)
        ),
        extra_frontmatter_keys=_strings(raw, "extra_frontmatter_keys", ()),
        recommended_sections=_strings(raw, "recommended_sections", DEFAULT_RECOMMENDED_SECTIONS),
        require_name_matches_directory=require_match,
        rules=RuleToggleConfig(
            enabled=_rule_ids(rules, "enabled"),
            disabled=_rule_ids(rules, "disabled"),
        ),
        rule_overrides=_rule_overrides(raw.get("rule_overrides")),
    )


def _strings(
    raw: dict[str, Any],
    key: str,
    default: tuple[str, ...],
    *,
    field_name: str | None = None,
    strip: bool = True,
) -> tuple[str, ...]:
    """Read a list of strings; with *strip*, surrounding whitespace and blank items are dropped."""
    value = raw.get(key, default)
    if value is None:
        return ()
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{field_name or key} must be a list of strings")
    if not strip:
        return tuple(value)
    return tuple(item.strip() for item in value if item.strip())


def _positive_int(raw: dict[str, Any], key: str, default: int) -> int:
    value = raw.get(key, default)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{key} must be a positive integer")
    return value


def _rule_ids(rules: dict[str, Any], key: str) -> tuple[str, ...]:
    return tuple(sorted({rule_id.upper() for rule_id in _strings(rules, key, (), field_name=f"rules.{key}")}))


def _rule_overrides(raw: Any) -> dict[str, RuleOverrideConfig]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("rule_overrides must be a mapping")

    overrides: dict[str, RuleOverrideConfig] = {}
    for rule_id, settings in raw.items():
        if not isinstance(rule_id, str) or not isinstance(settings, dict):
            raise ConfigError("rule_overrides entries must map a rule id to a mapping")
        severity = settings.get("severity")
        if severity is not None and severity not in VALID_SEVERITIES:
            raise ConfigError(
                f"rule_overrides.{rule_id}.severity must be one of {sorted(VALID_SEVERITIES)}, got {severity!r}"
            )
        overrides[rule_id.strip().upper()] = RuleOverrideConfig(severity=severity)
    return overrides
