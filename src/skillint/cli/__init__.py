"""Command-line interface for Skillint."""
