"""Finding SKILL.md files and giving each one a unique output name."""

from __future__ import annotations

import hashlib
import logging
from collections import defaultdict
from pathlib import Path

from skillint.constants.discovery import SKILL_MARKDOWN_FILENAME, SKILL_NAME_DISAMBIGUATION_HASH_LENGTH
from skillint.constants.frontmatter import FIELD_NAME
from skillint.exceptions import SkillParseError
from skillint.parsers import parse_skill_markdown_file
from skillint.utils import relative_posix, sanitize_output_name

logger = logging.getLogger(__name__)


def discover_skill_files(
    root: Path,
    skill_globs: tuple[str, ...],
    max_file_mb: int,
    exclude_dirs: tuple[str, ...] = (),
) -> list[Path]:
    """Return resolved SKILL.md paths matched by *skill_globs*, ordered by relative path.

    Files inside an *exclude_dirs* directory or larger than *max_file_mb* are skipped.
    """
    root = root.resolve()
    limit = max_file_mb * 1024 * 1024
    excluded = frozenset(exclude_dirs)
    found: set[Path] = set()

    for pattern in skill_globs:
        for candidate in root.glob(pattern):
            if candidate.name != SKILL_MARKDOWN_FILENAME or not candidate.is_file():
                continue
            if excluded.intersection(candidate.relative_to(root).parts[:-1]):
                continue
            try:
                size = candidate.stat().st_size
            except OSError as exc:
                logger.debug("Cannot stat %s: %s", candidate, exc)
                continue
            if size > limit:
                logger.warning("Skipping %s: larger than %d MB", candidate, max_file_mb)
                continue
            found.add(candidate.resolve())

    return sorted(found, key=lambda path: relative_posix(path, root))


def derive_skill_name(file_path: Path, root: Path, *, declared_name: str | None = None) -> str:
    """Pick an output name: declared ``name``, else the skill folder, else the relative path."""
    if declared_name:
        return sanitize_output_name(declared_name)
    root = root.resolve()
    file_path = file_path.resolve()
    if file_path.parent != root:
        return sanitize_output_name(file_path.parent.name)
    return sanitize_output_name(relative_posix(file_path.with_suffix(""), root).replace("/", "-"))


def extract_frontmatter_name(path: Path) -> str | None:
    """Return the declared ``name`` of a skill, or None when it cannot be read.

    Parse problems are reported later by the full lint pass.
    """
    try:
        parsed = parse_skill_markdown_file(path)
    except (SkillParseError, OSError, UnicodeDecodeError) as exc:
        logger.debug("No declared name for %s: %s", path, exc)
        return None
    name = parsed.frontmatter.get(FIELD_NAME) if parsed.frontmatter else None
    if isinstance(name, str) and name.strip():
        return name.strip()
    return None


def assign_unique_skill_names(
    skill_files: list[Path],
    root: Path,
) -> tuple[dict[Path, str], dict[str, tuple[Path, ...]]]:
    """Map each file to an output name, suffixing colliding names with a path hash.

    Returns the mapping plus the collisions, keyed by the shared base name.
    """
    root = root.resolve()
    by_base: defaultdict[str, list[Path]] = defaultdict(list)
    for path in skill_files:
        resolved = path.resolve()
        by_base[derive_skill_name(resolved, root, declared_name=extract_frontmatter_name(resolved))].append(resolved)

    names: dict[Path, str] = {}
    collisions: dict[str, tuple[Path, ...]] = {}
    for base, paths in sorted(by_base.items()):
        if len(paths) == 1:
            names[paths[0]] = base
            continue
        ordered = tuple(sorted(paths, key=lambda path: relative_posix(path, root)))
        collisions[base] = ordered
        for path in ordered:
            names[path] = f"{base}-{_path_hash(path, root)}"
    return names, collisions


def _path_hash(path: Path, root: Path) -> str:
    digest = hashlib.sha256(relative_posix(path, root).encode("utf-8")).hexdigest()
    return digest[:SKILL_NAME_DISAMBIGUATION_HASH_LENGTH]
