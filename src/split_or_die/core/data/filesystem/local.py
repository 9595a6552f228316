"""Local filesystem adapter.

Implements the FileSystem protocol on top of ``os.walk`` and ``os.stat``.
Every blocking call is offloaded with ``asyncio.to_thread`` so the event
loop stays responsive while a scan runs.
"""

from __future__ import annotations

import asyncio
import os
import stat as stat_module
from pathlib import Path, PurePosixPath

from split_or_die.types.models import FileStat

from .paths import CASE_INSENSITIVE_FS


def expand_braces(pattern: str) -> list[str]:
    """Expand brace alternations into plain glob patterns.

    Nested groups are supported. A brace without a matching close, or a
    group without a top-level comma, is kept literally.

    Examples:
        >>> expand_braces("{**/a/**,**/b/**}")
        ['**/a/**', '**/b/**']
        >>> expand_braces("src/*.{ts,tsx}")
        ['src/*.ts', 'src/*.tsx']
    """
    depth = 0
    start = -1
    commas: list[int] = []
    for index, char in enumerate(pattern):
        if char == "{":
            if depth == 0:
                start = index
                commas = []
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                if not commas:
                    # Literal group, keep scanning after it
                    continue
                prefix, suffix = pattern[:start], pattern[index + 1:]
                bounds = [start, *commas, index]
                options = [pattern[a + 1:b] for a, b in zip(bounds, bounds[1:])]
                expanded: list[str] = []
                for option in options:
                    expanded.extend(expand_braces(prefix + option + suffix))
                return expanded
        elif char == "," and depth == 1:
            commas.append(index)
    return [pattern]


class GlobFilter:
    """Matches root-relative POSIX paths against a compiled exclusion glob."""

    def __init__(self, exclude_glob: str | None, *, case_sensitive: bool = not CASE_INSENSITIVE_FS) -> None:
        self.patterns: tuple[str, ...] = tuple(expand_braces(exclude_glob)) if exclude_glob else ()
        self.case_sensitive: bool = case_sensitive
        # "<dir>/**" excludes everything below <dir>, so <dir> need not be walked
        self.prune_patterns: tuple[str, ...] = tuple(
            pattern[:-3] for pattern in self.patterns if pattern.endswith("/**") and len(pattern) > 3
        )

    def excludes_file(self, relative: str) -> bool:
        path = PurePosixPath(relative)
        return any(path.full_match(p, case_sensitive=self.case_sensitive) for p in self.patterns)

    def prunes_directory(self, relative: str) -> bool:
        path = PurePosixPath(relative)
        return any(path.full_match(p, case_sensitive=self.case_sensitive) for p in self.prune_patterns)


def _relative_posix(path: str, root: str) -> str:
    relative = os.path.relpath(path, root)
    return "" if relative == "." else relative.replace(os.sep, "/")


def is_glob_excluded(path: str, root: str, exclude_glob: str | None) -> bool:
    """Check a file against the exclusion glob the way enumeration of root would."""
    if not exclude_glob:
        return False
    return GlobFilter(exclude_glob).excludes_file(_relative_posix(path, os.path.abspath(root)))


class LocalFileSystem:
    """FileSystem implementation for the local disk."""

    def __init__(self, *, follow_symlinks: bool = False) -> None:
        """Initialize the adapter.

        Args:
            follow_symlinks: Whether to descend into symlinked directories
        """
        self.follow_symlinks: bool = follow_symlinks

    def find_files_sync(self, root: str, exclude_glob: str | None) -> list[str]:
        """Enumerate files under root not matched by exclude_glob.

        Unreadable directories are skipped.
        """
        root_path = os.path.abspath(root)
        glob_filter = GlobFilter(exclude_glob)
        results: list[str] = []

        for dirpath, dirnames, filenames in os.walk(root_path, followlinks=self.follow_symlinks):
            relative_dir = _relative_posix(dirpath, root_path)
            dirnames[:] = [
                name
                for name in dirnames
                if not glob_filter.prunes_directory(f"{relative_dir}/{name}" if relative_dir else name)
            ]
            for name in filenames:
                relative = f"{relative_dir}/{name}" if relative_dir else name
                if glob_filter.excludes_file(relative):
                    continue
                results.append(os.path.join(dirpath, name))

        return results

    async def find_files(self, root: str, exclude_glob: str | None) -> list[str]:
        return await asyncio.to_thread(self.find_files_sync, root, exclude_glob)

    def stat_sync(self, path: str) -> FileStat:
        """Stat a regular file.

        Raises:
            OSError: If the path cannot be stat'ed or is not a regular file
        """
        result = os.stat(path)
        if not stat_module.S_ISREG(result.st_mode):
            raise IsADirectoryError(f"Not a regular file: {path}")
        return FileStat(size=result.st_size)

    async def stat(self, path: str) -> FileStat:
        return await asyncio.to_thread(self.stat_sync, path)

    async def read_bytes(self, path: str) -> bytes:
        return await asyncio.to_thread(Path(path).read_bytes)
