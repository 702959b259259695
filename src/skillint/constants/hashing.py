"""Constants for finding identifiers."""

from __future__ import annotations

# Hex characters kept from the sha256 of a finding's identity.
FINDING_ID_HASH_LENGTH: int = 16
