"""Typed configuration structures for Skillint settings."""

from __future__ import annotations

from dataclasses import dataclass

from skillint.types.common import Severity


@dataclass(frozen=True)
class RuleToggleConfig:
    """Rule enablement toggles.

    An empty ``enabled`` tuple means every known rule runs.
    """

    enabled: tuple[str, ...] = ()
    disabled: tuple[str, ...] = ()


@dataclass(frozen=True)
class RuleOverrideConfig:
    """Per-rule override settings from ``skillint.yaml``."""

    severity: Severity | None = None
