"""Detectors that compare skill documents across the corpus."""

from __future__ import annotations

from pathlib import Path

from skillint.config import SkillintConfig
from skillint.constants.frontmatter import FIELD_NAME
from skillint.constants.rules import NAME_DUPLICATE
from skillint.detectors.base import CorpusDetector
from skillint.detectors.common import frontmatter_evidence, make_candidate
from skillint.detectors.frontmatter import declared_string
from skillint.model import FindingCandidate, ParsedSkillDocument
from skillint.utils import relative_posix


class NameDuplicateDetector(CorpusDetector):
    """Declared skill names must be unique across the corpus."""

    rule_id = NAME_DUPLICATE

    def run(
        self,
        *,
        root: Path,
        documents: dict[str, ParsedSkillDocument],
        config: SkillintConfig,
    ) -> dict[str, list[FindingCandidate]]:
        owners: dict[str, list[tuple[str, ParsedSkillDocument]]] = {}
        for skill_name, parsed in sorted(documents.items()):
            declared = declared_string(parsed, FIELD_NAME)
            if declared is not None:
                owners.setdefault(declared, []).append((skill_name, parsed))

        results: dict[str, list[FindingCandidate]] = {}
        for declared, entries in sorted(owners.items()):
            if len(entries) < 2:
                continue
            paths = [relative_posix(parsed.file_path, root) for _, parsed in entries]
            for skill_name, parsed in entries:
                own_path = relative_posix(parsed.file_path, root)
                others = [path for path in paths if path != own_path]
                results.setdefault(skill_name, []).append(
                    make_candidate(
                        self.rule_id,
                        title="Duplicate skill name",
                        description=f"Skill name '{declared}' is also declared by: {', '.join(others)}.",
                        evidence=frontmatter_evidence(parsed, FIELD_NAME),
                        recommendation="Give every skill a unique `name`.",
                    )
                )
        return results


CORPUS_DETECTOR_CLASSES: tuple[type[CorpusDetector], ...] = (NameDuplicateDetector,)
