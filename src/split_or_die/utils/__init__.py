"""Shared utilities: formatting and logging."""

from __future__ import annotations

from .formatting import format_bytes, format_file_count

__all__ = [
    "format_bytes",
    "format_file_count",
]
