"""Warning diagnostics for oversized files."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Final

from split_or_die.types.models import Diagnostic
from split_or_die.utils.formatting import format_bytes

DIAGNOSTIC_SOURCE: Final[str] = "split-or-die"


def create_diagnostic(size: int, line_count: int) -> Diagnostic:
    """Build the warning attached to an oversized file.

    Examples:
        >>> create_diagnostic(25_000, 601).message
        'File size 24.4 KB (=601 lines). Consider splitting into smaller modules.'
    """
    message = f"File size {format_bytes(size)} (={line_count} lines). Consider splitting into smaller modules."
    return Diagnostic(message=message, severity="warning", source=DIAGNOSTIC_SOURCE)


class DiagnosticCollection:
    """In-memory DiagnosticsSink keyed by normalized path."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[Diagnostic, ...]] = {}

    def set(self, path: str, diagnostics: Sequence[Diagnostic]) -> None:
        self._entries[path] = tuple(diagnostics)

    def delete(self, path: str) -> None:
        _ = self._entries.pop(path, None)

    def clear(self) -> None:
        self._entries.clear()

    def get(self, path: str) -> tuple[Diagnostic, ...]:
        return self._entries.get(path, ())

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
