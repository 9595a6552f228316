"""Display-ready view of the scan results and exclusions."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence

from split_or_die.config.models import ScannerConfig
from split_or_die.core.data.filesystem.exclusions import ExclusionState
from split_or_die.core.data.filesystem.extensions import normalize_extensions
from split_or_die.core.updater import find_owning_root
from split_or_die.types.models import ScanEntry, ViewEntry, ViewState
from split_or_die.utils.formatting import format_bytes


def as_relative_path(path: str, roots: Sequence[str]) -> str:
    """Label a path relative to its workspace root.

    With several roots open the label is prefixed with the root's folder
    name. Paths outside every root are returned unchanged.
    """
    root = find_owning_root(path, roots)
    if root is None:
        return path
    relative = os.path.relpath(path, os.path.abspath(root))
    if relative == ".":
        relative = os.path.basename(path)
    if len(roots) > 1:
        return os.path.join(os.path.basename(os.path.abspath(root)), relative)
    return relative


def size_label(entry: ScanEntry) -> str:
    """Size and line count, e.g. ``"24.4 KB (601 lines)"``."""
    return f"{format_bytes(entry.size)} ({entry.line_count} lines)"


def to_view_entry(path: str, roots: Sequence[str]) -> ViewEntry:
    return ViewEntry(path=path, label=as_relative_path(path, roots) or path)


def oversized_entries(results: Mapping[str, ScanEntry], roots: Sequence[str]) -> tuple[ViewEntry, ...]:
    """Oversized files sorted by size, largest first."""
    ordered = sorted(results.values(), key=lambda entry: (-entry.size, entry.path))
    return tuple(
        ViewEntry(
            path=entry.path,
            label=as_relative_path(entry.path, roots),
            size_label=size_label(entry),
            size=entry.size,
            line_count=entry.line_count,
        )
        for entry in ordered
    )


def build_view_state(
    config: ScannerConfig,
    exclusion: ExclusionState,
    results: Mapping[str, ScanEntry],
    roots: Sequence[str],
) -> ViewState:
    """Assemble everything the presentation layer renders."""
    return ViewState(
        size_threshold_kb=config.size_threshold_kb,
        excluded_extensions=tuple(normalize_extensions(config.exclude_extensions)),
        excluded_folders=tuple(to_view_entry(entry, roots) for entry in exclusion.excluded_folders),
        excluded_files=tuple(to_view_entry(entry, roots) for entry in exclusion.excluded_files),
        oversized_files=oversized_entries(results, roots),
    )
