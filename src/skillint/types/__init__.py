"""Shared type aliases for Skillint."""

from .common import JsonObject, JsonScalar, JsonValue, Severity
from .config import RuleOverrideConfig, RuleToggleConfig

__all__ = [
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "RuleOverrideConfig",
    "RuleToggleConfig",
    "Severity",
]
