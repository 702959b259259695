"""I/O helpers for hashing and atomic report writes."""

from .files import file_sha256
from .json_io import dump_json, write_json_atomic, write_text_atomic

__all__ = ["dump_json", "file_sha256", "write_json_atomic", "write_text_atomic"]
