"""Branding constants for docs and terminal output."""

from __future__ import annotations

BRAND_NAME: str = "SKILLINT"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ SKILLINT",
    "     // structural lint for agent skill docs",
)
LINT_SUMMARY_TITLE: str = "Lint summary"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} skill document linter"))
