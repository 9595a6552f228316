"""Incremental single-file check.

Re-evaluates one file against the same rules as the bulk scanner and
patches the result set and diagnostics in place. Every early exit clears
any stale entry for the file, so the result set never keeps a file that
is no longer in scope or no longer oversized.
"""

from __future__ import annotations

import os
from collections.abc import Sequence

from split_or_die.core.diagnostics import create_diagnostic
from split_or_die.core.data.filesystem.exclusions import ExclusionState, is_explicitly_excluded
from split_or_die.core.data.filesystem.extensions import should_skip_extension
from split_or_die.core.data.filesystem.local import is_glob_excluded
from split_or_die.core.data.filesystem.paths import (
    is_within,
    normalize_fs_path,
    path_scheme,
    resolve_fs_path,
)
from split_or_die.core.data.filesystem.scanner import (
    count_text_lines,
    estimate_lines,
    is_oversized,
    read_line_count,
    safe_stat_size,
)
from split_or_die.types.aliases import ResultSet
from split_or_die.types.models import ScanEntry
from split_or_die.types.protocols import DiagnosticsSink, FileSystem
from split_or_die.utils.logging import get_logger

logger = get_logger(__name__)


def find_owning_root(path: str, roots: Sequence[str]) -> str | None:
    """Return the workspace root containing path, or None.

    The deepest matching root wins when roots are nested.
    """
    normalized = normalize_fs_path(path)
    owners = [root for root in roots if is_within(normalized, normalize_fs_path(os.path.abspath(root)))]
    return max(owners, key=len, default=None)


def _discard(key: str, results: ResultSet, diagnostics: DiagnosticsSink) -> None:
    _ = results.pop(key, None)
    diagnostics.delete(key)


async def check_file(
    path: str,
    exclusion: ExclusionState,
    threshold_bytes: int,
    results: ResultSet,
    diagnostics: DiagnosticsSink,
    fs: FileSystem,
    roots: Sequence[str],
    *,
    content: str | None = None,
) -> ScanEntry | None:
    """Re-check one file and update the result set.

    Args:
        path: Filesystem path or ``file:`` URI of the file
        exclusion: Exclusion snapshot to apply
        threshold_bytes: Files strictly larger than this are reported
        results: Result set to patch
        diagnostics: Diagnostics sink to patch
        fs: Filesystem collaborator
        roots: Open workspace roots
        content: Decoded content already held by the caller, used for the
            line count instead of re-reading the file

    Returns:
        The new entry if the file is oversized, otherwise None
    """
    scheme = path_scheme(path)
    if scheme is not None and scheme != "file":
        logger.debug("Ignoring %s: unsupported scheme %s", path, scheme)
        _discard(normalize_fs_path(path), results, diagnostics)
        return None

    fs_path = os.path.abspath(resolve_fs_path(path))
    key = normalize_fs_path(fs_path)

    root = find_owning_root(fs_path, roots)
    if root is None:
        logger.debug("Ignoring %s: outside every workspace root", fs_path)
        _discard(key, results, diagnostics)
        return None

    # Enumeration never yields glob-excluded files, so neither may a save
    if is_glob_excluded(fs_path, root, exclusion.exclude_glob):
        _discard(key, results, diagnostics)
        return None

    if should_skip_extension(fs_path, exclusion.exclude_extensions) or is_explicitly_excluded(fs_path, exclusion):
        _discard(key, results, diagnostics)
        return None

    size = await safe_stat_size(fs, fs_path)
    if size is None or not is_oversized(size, threshold_bytes):
        _discard(key, results, diagnostics)
        return None

    if content is not None:
        line_count = count_text_lines(content)
    else:
        measured = await read_line_count(fs, fs_path)
        line_count = measured if measured is not None else estimate_lines(size)

    entry = ScanEntry(path=fs_path, size=size, line_count=line_count)
    results[key] = entry
    diagnostics.set(key, [create_diagnostic(size, line_count)])
    return entry
