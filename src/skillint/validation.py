"""Preflight checks shared by ``skillint lint`` and ``skillint validate-config``."""

from __future__ import annotations

from pathlib import Path

from skillint.config import validate_config_file
from skillint.constants.validation import CFG010
from skillint.exceptions.validation import ValidationError, sort_errors


def preflight_validate(root: Path, config_path: Path | None = None) -> list[ValidationError]:
    """Return every problem with the corpus root and its config, sorted; empty when valid."""
    resolved = root.resolve()
    if not resolved.is_dir():
        missing_root = ValidationError(
            code=CFG010,
            path=str(resolved),
            field="",
            message=f"root directory does not exist: {resolved}",
        )
        return [missing_root]
    return sort_errors(validate_config_file(resolved, config_path, config_explicit=config_path is not None))
