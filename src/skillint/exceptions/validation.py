"""Config validation problems reported by ``skillint validate-config``."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """One config problem, identified by a stable ``CFGxxx`` code."""

    code: str
    path: str
    field: str
    message: str
    hint: str = ""
    line: int | None = None

    @property
    def location(self) -> str:
        return self.path if self.line is None else f"{self.path}:{self.line}"

    @property
    def sort_key(self) -> tuple[str, str, str, int]:
        return (self.code, self.path, self.field, self.line or 0)

    def format(self) -> str:
        """Render as ``[CODE] location message (hint)``."""
        text = f"[{self.code}] {self.location} {self.message}"
        return f"{text} ({self.hint})" if self.hint else text


def sort_errors(errors: Iterable[ValidationError]) -> list[ValidationError]:
    """Order errors by code, then path, field and line."""
    return sorted(errors, key=lambda error: error.sort_key)


def format_errors(errors: Iterable[ValidationError]) -> str:
    return "\n".join(error.format() for error in sort_errors(errors))
