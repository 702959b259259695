"""Shared constants for Skillint."""
