"""Base classes for lint rules."""

from __future__ import annotations

import inspect
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from skillint.config import SkillintConfig
from skillint.model import FindingCandidate, ParsedSkillDocument

RULE_ID_RE = re.compile(r"^[A-Z][A-Z0-9_]+$")


class _RuleBase(ABC):
    """Checks at class-creation time that concrete rules carry an UPPER_SNAKE_CASE ``rule_id``."""

    rule_id: ClassVar[str]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if inspect.isabstract(cls):
            return
        declared = getattr(cls, "rule_id", None)
        if not isinstance(declared, str) or not declared.strip():
            raise TypeError(f"{cls.__name__} has no `rule_id`")
        if RULE_ID_RE.fullmatch(declared) is None:
            raise TypeError(f"{cls.__name__}.rule_id must be UPPER_SNAKE_CASE (got {declared!r})")


class Detector(_RuleBase):
    """Rule that looks at one parsed skill document."""

    @abstractmethod
    def run(
        self,
        *,
        skill_name: str,
        parsed: ParsedSkillDocument,
        config: SkillintConfig,
    ) -> list[FindingCandidate]: ...


class CorpusDetector(_RuleBase):
    """Rule that compares documents across the whole corpus."""

    @abstractmethod
    def run(
        self,
        *,
        root: Path,
        documents: dict[str, ParsedSkillDocument],
        config: SkillintConfig,
    ) -> dict[str, list[FindingCandidate]]:
        """Return candidates keyed by skill name; *documents* maps skill name to parsed document."""
