"""Atomic report persistence.

Reports are written to a sibling temp file and moved into place with
``os.replace`` so readers never observe a half-written file.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path


def dump_json(payload: object) -> str:
    """Serialize *payload* deterministically (sorted keys, two-space indent)."""
    return json.dumps(payload, indent=2, sort_keys=True) + "\n"


def write_json_atomic(*, path: Path, payload: object, temp_prefix: str, temp_suffix: str) -> None:
    write_text_atomic(path=path, content=dump_json(payload), temp_prefix=temp_prefix, temp_suffix=temp_suffix)


def write_text_atomic(*, path: Path, content: str, temp_prefix: str, temp_suffix: str) -> None:
    """Write *content* to *path* through a temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=temp_prefix, suffix=temp_suffix)
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
