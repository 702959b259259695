"""Lint orchestration package."""

from __future__ import annotations

from typing import Any

__all__ = ["lint_workspace"]


def __getattr__(name: str) -> Any:
    """Lazily expose scanner APIs to avoid import cycles at package import time."""
    if name == "lint_workspace":
        from .orchestrator import lint_workspace

        return lint_workspace
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
