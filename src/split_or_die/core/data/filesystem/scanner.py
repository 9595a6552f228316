"""Bulk workspace scanner.

Enumerates candidate files under every workspace root, drops the ones
excluded by extension or explicit exclusion before paying any I/O, then
measures the rest in fixed-size concurrent batches. Files strictly larger
than the threshold are returned with their size and line count.

Transient I/O failures never abort a scan: a file whose stat fails is
skipped, and a file whose content cannot be read gets an estimated line
count instead.
"""

from __future__ import annotations

import asyncio
import logging
import math
from collections.abc import Sequence
from typing import Final

from split_or_die.types.models import ScanEntry
from split_or_die.types.protocols import FileSystem
from split_or_die.utils.logging import get_logger, log_with_context

from .exclusions import ExclusionState, is_explicitly_excluded
from .extensions import should_skip_extension
from .paths import normalize_fs_path

logger = get_logger(__name__)

# Files measured concurrently per batch; bounds open file handles
BATCH_SIZE: Final[int] = 50

# Line-count estimate used when content cannot be read
_LINES_PER_KB: Final[int] = 25
_ESTIMATE_ROUNDING: Final[int] = 50


def count_lines(data: bytes) -> int:
    """Count lines as line-feed bytes plus one; an empty file has 0 lines."""
    if not data:
        return 0
    return data.count(b"\n") + 1


def count_text_lines(text: str) -> int:
    """Count lines of already decoded content with the same rule as count_lines."""
    if not text:
        return 0
    return text.count("\n") + 1


def estimate_lines(size: int) -> int:
    """Estimate a line count from a size, assuming ~25 lines per KB.

    The estimate is rounded half-up to the nearest 50 and never below 1.

    Examples:
        >>> estimate_lines(102_400)
        2500
        >>> estimate_lines(10)
        1
    """
    estimated = (size / 1024) * _LINES_PER_KB
    rounded = math.floor(estimated / _ESTIMATE_ROUNDING + 0.5) * _ESTIMATE_ROUNDING
    return max(1, rounded)


def is_oversized(size: int, threshold_bytes: int) -> bool:
    """A file is oversized only when strictly larger than the threshold."""
    return size > threshold_bytes


def is_in_scope(path: str, exclusion: ExclusionState) -> bool:
    """Check both the extension and the explicit exclusion rules."""
    if should_skip_extension(path, exclusion.exclude_extensions):
        return False
    return not is_explicitly_excluded(path, exclusion)


async def safe_stat_size(fs: FileSystem, path: str) -> int | None:
    """Return a file's size, or None if it cannot be stat'ed."""
    try:
        stat = await fs.stat(path)
    except OSError as exc:
        logger.debug("Skipping %s: stat failed (%s)", path, exc)
        return None
    return stat.size


async def read_line_count(fs: FileSystem, path: str) -> int | None:
    """Return a file's line count, or None if it cannot be read."""
    try:
        data = await fs.read_bytes(path)
    except OSError as exc:
        logger.debug("Estimating lines for %s: read failed (%s)", path, exc)
        return None
    return count_lines(data)


async def measure_file(fs: FileSystem, path: str, threshold_bytes: int) -> ScanEntry | None:
    """Measure one candidate file.

    Returns:
        A ScanEntry if the file is oversized, None if it is within the
        threshold or could not be stat'ed
    """
    size = await safe_stat_size(fs, path)
    if size is None or not is_oversized(size, threshold_bytes):
        return None

    line_count = await read_line_count(fs, path)
    if line_count is None:
        line_count = estimate_lines(size)
    return ScanEntry(path=path, size=size, line_count=line_count)


async def measure_batch(
    fs: FileSystem,
    paths: Sequence[str],
    threshold_bytes: int,
) -> list[ScanEntry | None]:
    """Measure a batch of files concurrently and wait for all of them."""
    async with asyncio.TaskGroup() as task_group:
        tasks = [task_group.create_task(measure_file(fs, path, threshold_bytes)) for path in paths]
    return [task.result() for task in tasks]


async def list_candidates(
    fs: FileSystem,
    root: str,
    exclusion: ExclusionState,
) -> list[str]:
    """Enumerate a root and keep only in-scope files."""
    try:
        files = await fs.find_files(root, exclusion.exclude_glob)
    except OSError as exc:
        logger.debug("Could not enumerate %s (%s)", root, exc)
        return []
    return [path for path in files if is_in_scope(path, exclusion)]


async def scan_workspace(
    roots: Sequence[str],
    exclusion: ExclusionState,
    threshold_bytes: int,
    fs: FileSystem,
    *,
    batch_size: int = BATCH_SIZE,
) -> dict[str, ScanEntry]:
    """Scan every workspace root for oversized files.

    Args:
        roots: Workspace root folders (empty for no workspace)
        exclusion: Exclusion snapshot to apply
        threshold_bytes: Files strictly larger than this are reported
        fs: Filesystem collaborator
        batch_size: Files measured concurrently per batch

    Returns:
        Oversized files keyed by normalized path
    """
    entries: dict[str, ScanEntry] = {}
    candidate_total = 0

    for root in roots:
        candidates = await list_candidates(fs, root, exclusion)
        candidate_total += len(candidates)

        for start in range(0, len(candidates), batch_size):
            batch = candidates[start:start + batch_size]
            for entry in await measure_batch(fs, batch, threshold_bytes):
                if entry is not None:
                    entries[normalize_fs_path(entry.path)] = entry

    log_with_context(
        logger,
        logging.INFO,
        "Workspace scan complete",
        extra={
            "roots": len(roots),
            "candidates": candidate_total,
            "oversized": len(entries),
        },
    )
    return entries
