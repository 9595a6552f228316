"""Type definitions and protocols for split-or-die.

This package provides:
- Data models (immutable dataclasses)
- Protocol definitions (host collaborator interfaces)
- Type aliases (PEP 695 syntax)
"""

from split_or_die.types.aliases import ResultSet
from split_or_die.types.models import (
    Diagnostic,
    DiagnosticRange,
    FileStat,
    ScanEntry,
    ViewEntry,
    ViewState,
)
from split_or_die.types.protocols import (
    DiagnosticsSink,
    FileSystem,
    SettingsStore,
    StateStore,
)

__all__ = [
    # Type aliases
    "ResultSet",
    # Data models
    "Diagnostic",
    "DiagnosticRange",
    "FileStat",
    "ScanEntry",
    "ViewEntry",
    "ViewState",
    # Protocols
    "DiagnosticsSink",
    "FileSystem",
    "SettingsStore",
    "StateStore",
]
