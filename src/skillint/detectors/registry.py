"""Detector registry and rule selection."""

from __future__ import annotations

from skillint.config import SkillintConfig
from skillint.detectors.base import CorpusDetector, Detector
from skillint.detectors.body import BODY_DETECTOR_CLASSES
from skillint.detectors.corpus import CORPUS_DETECTOR_CLASSES
from skillint.detectors.frontmatter import FRONTMATTER_DETECTOR_CLASSES

DETECTOR_CLASSES: tuple[type[Detector], ...] = FRONTMATTER_DETECTOR_CLASSES + BODY_DETECTOR_CLASSES


def build_detectors(config: SkillintConfig) -> list[Detector]:
    """Instantiate per-document detectors whose rules are active."""
    active = set(config.active_rule_ids)
    return [cls() for cls in DETECTOR_CLASSES if cls.rule_id in active]


def build_corpus_detectors(config: SkillintConfig) -> list[CorpusDetector]:
    """Instantiate corpus-wide detectors whose rules are active."""
    active = set(config.active_rule_ids)
    return [cls() for cls in CORPUS_DETECTOR_CLASSES if cls.rule_id in active]
