"""Tests for shared I/O and naming helpers."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

from skillint.io import file_sha256, write_json_atomic
from skillint.utils import relative_posix, sanitize_output_name


def test_write_json_atomic_round_trip(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "report.json"

    write_json_atomic(path=target, payload={"b": 1, "a": [1, 2]}, temp_prefix=".tmp-", temp_suffix=".json")

    assert json.loads(target.read_text(encoding="utf-8")) == {"a": [1, 2], "b": 1}
    assert target.read_text(encoding="utf-8").startswith('{\n  "a"')
    assert [path.name for path in target.parent.iterdir()] == ["report.json"]


def test_file_sha256_matches_hashlib(tmp_path: Path) -> None:
    target = tmp_path / "data.bin"
    target.write_bytes(b"skill" * 10_000)

    assert file_sha256(target) == hashlib.sha256(b"skill" * 10_000).hexdigest()


def test_sanitize_output_name() -> None:
    assert sanitize_output_name("  My Skill!! ") == "my-skill"
    assert sanitize_output_name("a//b") == "a-b"
    assert sanitize_output_name("---") == "unnamed-skill"


def test_relative_posix(tmp_path: Path) -> None:
    assert relative_posix(tmp_path / "a" / "b.md", tmp_path) == "a/b.md"
    assert relative_posix(Path("/elsewhere/x.md"), tmp_path) == "/elsewhere/x.md"
