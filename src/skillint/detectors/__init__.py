"""Detector package for Skillint."""

from .base import CorpusDetector, Detector
from .registry import build_corpus_detectors, build_detectors

__all__ = ["CorpusDetector", "Detector", "build_corpus_detectors", "build_detectors"]
