"""Data models for split-or-die.

This module defines immutable dataclasses used throughout the application
for type-safe data transfer between the scanner, the session and the
presentation layer.
"""

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class FileStat:
    """Result of a stat call on a candidate file."""

    size: int


@dataclass(slots=True, frozen=True)
class ScanEntry:
    """Measured metadata for one oversized file.

    Entries are replaced as a whole whenever the file is re-measured,
    never patched field by field.
    """

    path: str
    size: int
    line_count: int


@dataclass(slots=True, frozen=True)
class DiagnosticRange:
    """Zero-based line/column span a diagnostic is anchored to."""

    start_line: int = 0
    start_column: int = 0
    end_line: int = 0
    end_column: int = 1


@dataclass(slots=True, frozen=True)
class Diagnostic:
    """Warning annotation attached to an oversized file."""

    message: str
    severity: str = "warning"
    source: str = "split-or-die"
    range: DiagnosticRange = field(default_factory=DiagnosticRange)


@dataclass(slots=True, frozen=True)
class ViewEntry:
    """Display-ready row for a path shown to the user."""

    path: str
    label: str
    size_label: str | None = None
    size: int | None = None
    line_count: int | None = None


@dataclass(slots=True, frozen=True)
class ViewState:
    """Everything the presentation layer needs to render the current state."""

    size_threshold_kb: int
    excluded_extensions: tuple[str, ...]
    excluded_folders: tuple[ViewEntry, ...]
    excluded_files: tuple[ViewEntry, ...]
    oversized_files: tuple[ViewEntry, ...]
