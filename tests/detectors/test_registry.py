"""Tests for detector contracts and rule selection."""

from __future__ import annotations

import pytest

from skillint.config import SkillintConfig
from skillint.constants.rules import ALL_RULE_IDS, LINK_BROKEN, NAME_DUPLICATE
from skillint.detectors import Detector, build_corpus_detectors, build_detectors
from skillint.types import RuleToggleConfig


def test_every_rule_has_exactly_one_detector() -> None:
    config = SkillintConfig()
    rule_ids = [detector.rule_id for detector in build_detectors(config)]
    rule_ids += [detector.rule_id for detector in build_corpus_detectors(config)]

    # FRONTMATTER_INVALID is raised by the pipeline when parsing fails.
    assert sorted(rule_ids) == sorted(rule_id for rule_id in ALL_RULE_IDS if rule_id != "FRONTMATTER_INVALID")
    assert len(rule_ids) == len(set(rule_ids))


def test_toggles_limit_built_detectors() -> None:
    config = SkillintConfig(rules=RuleToggleConfig(enabled=(LINK_BROKEN, NAME_DUPLICATE), disabled=(NAME_DUPLICATE,)))

    assert [detector.rule_id for detector in build_detectors(config)] == [LINK_BROKEN]
    assert build_corpus_detectors(config) == []


def test_detector_subclass_requires_upper_snake_rule_id() -> None:
    with pytest.raises(TypeError, match="UPPER_SNAKE_CASE"):

        class BadDetector(Detector):
            rule_id = "bad-rule"

            def run(self, *, skill_name, parsed, config):  # type: ignore[no-untyped-def]
                return []


def test_detector_subclass_requires_rule_id() -> None:
    with pytest.raises(TypeError, match="rule_id"):

        class MissingRuleDetector(Detector):
            def run(self, *, skill_name, parsed, config):  # type: ignore[no-untyped-def]
                return []
