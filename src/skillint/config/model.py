"""Config data model for Skillint runs."""

from __future__ import annotations

from dataclasses import dataclass, field

from skillint.constants.body import DEFAULT_MAX_BODY_LINES, DEFAULT_RECOMMENDED_SECTIONS
from skillint.constants.config import DEFAULT_MAX_FILE_MB, DEFAULT_SKILL_GLOBS
from skillint.constants.discovery import DEFAULT_EXCLUDE_DIRS
from skillint.constants.frontmatter import (
    DEFAULT_MAX_DESCRIPTION_LENGTH,
    DEFAULT_MAX_NAME_LENGTH,
    DEFAULT_RESERVED_NAME_WORDS,
    KNOWN_FRONTMATTER_KEYS,
)
from skillint.constants.rules import ALL_RULE_IDS
from skillint.types import RuleOverrideConfig, RuleToggleConfig


@dataclass(frozen=True)
class SkillintConfig:
    """Resolved linter config."""

    skill_globs: tuple[str, ...] = DEFAULT_SKILL_GLOBS
    exclude_dirs: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS
    max_file_mb: int = DEFAULT_MAX_FILE_MB
    max_body_lines: int = DEFAULT_MAX_BODY_LINES
    max_name_length: int = DEFAULT_MAX_NAME_LENGTH
    max_description_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH
    reserved_name_words: tuple[str, ...] = DEFAULT_RESERVED_NAME_WORDS
    extra_frontmatter_keys: tuple[str, ...] = ()
    recommended_sections: tuple[str, ...] = DEFAULT_RECOMMENDED_SECTIONS
    require_name_matches_directory: bool = True
    rules: RuleToggleConfig = RuleToggleConfig()
    rule_overrides: dict[str, RuleOverrideConfig] = field(default_factory=dict)

    @property
    def known_frontmatter_keys(self) -> frozenset[str]:
        """Recognized keys plus any project-specific extensions."""
        return KNOWN_FRONTMATTER_KEYS | frozenset(self.extra_frontmatter_keys)

    @property
    def active_rule_ids(self) -> tuple[str, ...]:
        """Rule ids that run after applying enabled/disabled toggles."""
        selected = self.rules.enabled or ALL_RULE_IDS
        disabled = set(self.rules.disabled)
        return tuple(rule_id for rule_id in sorted(selected) if rule_id not in disabled)

    def is_rule_active(self, rule_id: str) -> bool:
        """Whether ``rule_id`` survives the enabled/disabled toggles."""
        return rule_id in self.active_rule_ids
