"""Collect-all validation of ``skillint.yaml``.

Unlike :func:`skillint.config.load_config`, which stops at the first
problem, validation walks the whole file and reports every issue with a
stable ``CFGxxx`` code so users can fix them in one pass.
"""

from __future__ import annotations

import difflib
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from skillint.constants.config import CONFIG_FILENAME, RULE_OVERRIDE_ALLOWED_KEYS
from skillint.constants.rules import ALL_RULE_IDS
from skillint.constants.scoring import VALID_SEVERITIES
from skillint.constants.validation import (
    ALLOWED_CONFIG_KEYS,
    ALLOWED_RULES_KEYS,
    BOOLEAN_KEYS,
    CFG001,
    CFG002,
    CFG003,
    CFG004,
    CFG005,
    CFG006,
    CFG007,
    CFG008,
    CFG009,
    LIST_OF_STRINGS_KEYS,
    POSITIVE_INT_KEYS,
)
from skillint.exceptions.validation import ValidationError

_KNOWN_RULES: frozenset[str] = frozenset(ALL_RULE_IDS)


class _Collector:
    """Accumulates errors for a single config file."""

    def __init__(self, path: Path) -> None:
        self.path = str(path)
        self.errors: list[ValidationError] = []

    def add(self, code: str, field: str, message: str, hint: str = "") -> None:
        self.errors.append(ValidationError(code=code, path=self.path, field=field, message=message, hint=hint))

    def unknown_keys(self, keys: Iterable[Any], allowed: frozenset[str], *, prefix: str = "") -> None:
        scope = f" in `{prefix.rstrip('.')}`" if prefix else ""
        for key in sorted(keys, key=str):
            if key not in allowed:
                self.add(CFG004, f"{prefix}{key}", f"unknown key `{key}`{scope}", suggest_key(str(key), allowed))

    def wrong_type(self, field: str, expected: str) -> None:
        self.add(CFG005, field, f"invalid type for `{field}`", f"expected {expected}")


def validate_config_file(
    root: Path,
    config_path: Path | None = None,
    *,
    config_explicit: bool = False,
) -> list[ValidationError]:
    """Return every problem found in the config file; never raises.

    A missing default ``skillint.yaml`` is fine; a missing file passed with
    ``--config`` (*config_explicit*) is ``CFG001``.
    """
    path = config_path.resolve() if config_path else root.resolve() / CONFIG_FILENAME
    collector = _Collector(path)

    if not path.exists():
        if config_explicit:
            collector.add(CFG001, "", f"config file not found: {path}")
        return collector.errors

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        collector.add(CFG002, "", f"cannot read config file: {exc}")
        return collector.errors
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        collector.add(CFG002, "", f"invalid YAML: {exc}")
        return collector.errors

    if raw is None:
        return collector.errors
    if not isinstance(raw, dict):
        collector.add(CFG003, "", f"config must be a YAML mapping, got {type(raw).__name__}")
        return collector.errors

    collector.unknown_keys(raw, ALLOWED_CONFIG_KEYS)
    _check_scalars(raw, collector)
    _check_rules(raw.get("rules"), collector)
    _check_rule_overrides(raw.get("rule_overrides"), collector)
    return collector.errors


def suggest_key(key: str, allowed: frozenset[str]) -> str:
    """Return a ``did you mean`` hint for a mistyped key, or an empty string."""
    matches = difflib.get_close_matches(key, sorted(allowed), n=1, cutoff=0.6)
    return f"did you mean `{matches[0]}`?" if matches else ""


def _is_string_list(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


def _check_scalars(raw: dict[str, Any], collector: _Collector) -> None:
    for key in POSITIVE_INT_KEYS:
        if key not in raw:
            continue
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, int):
            collector.wrong_type(key, "a positive integer")
        elif value <= 0:
            collector.add(CFG007, key, f"`{key}` must be a positive integer, got {value}")

    for key in BOOLEAN_KEYS:
        if key in raw and not isinstance(raw[key], bool):
            collector.wrong_type(key, "a boolean")

    for key in LIST_OF_STRINGS_KEYS:
        if key in raw and not _is_string_list(raw[key]):
            collector.wrong_type(key, "a list of strings")


def _check_rules(rules: Any, collector: _Collector) -> None:
    if rules is None:
        return
    if not isinstance(rules, dict):
        collector.add(CFG009, "rules", "`rules` must be a mapping")
        return

    collector.unknown_keys(rules, ALLOWED_RULES_KEYS, prefix="rules.")

    selected: dict[str, set[str]] = {}
    for toggle in ("enabled", "disabled"):
        if toggle not in rules:
            continue
        field = f"rules.{toggle}"
        if not _is_string_list(rules[toggle]):
            collector.wrong_type(field, "a list of strings")
            continue
        rule_ids = {rule_id.strip().upper() for rule_id in rules[toggle] or ()}
        selected[toggle] = rule_ids
        for rule_id in sorted(rule_ids - _KNOWN_RULES):
            collector.add(CFG006, field, f"unknown rule id `{rule_id}`", suggest_key(rule_id, _KNOWN_RULES))

    overlap = selected.get("enabled", set()) & selected.get("disabled", set())
    if overlap:
        collector.add(
            CFG008,
            "rules",
            f"rule(s) in both enabled and disabled: {', '.join(sorted(overlap))}",
            "remove duplicates from one list",
        )


def _check_rule_overrides(overrides: Any, collector: _Collector) -> None:
    if overrides is None:
        return
    if not isinstance(overrides, dict):
        collector.add(CFG009, "rule_overrides", "`rule_overrides` must be a mapping")
        return

    for rule_id in sorted(overrides, key=str):
        field = f"rule_overrides.{rule_id}"
        normalized = str(rule_id).strip().upper()
        if normalized not in _KNOWN_RULES:
            collector.add(CFG006, field, f"unknown rule id `{rule_id}`", suggest_key(normalized, _KNOWN_RULES))

        settings = overrides[rule_id]
        if not isinstance(settings, dict):
            collector.add(CFG009, field, f"`{field}` must be a mapping")
            continue
        collector.unknown_keys(settings, RULE_OVERRIDE_ALLOWED_KEYS, prefix=f"{field}.")

        severity = settings.get("severity")
        if severity is not None and severity not in VALID_SEVERITIES:
            collector.add(
                CFG006,
                f"{field}.severity",
                f"invalid value for `{field}.severity`",
                f"expected one of: {', '.join(sorted(VALID_SEVERITIES))}; got: {severity!r}",
            )
