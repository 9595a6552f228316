"""Filesystem operations: exclusion rules, enumeration and measurement."""

from __future__ import annotations

from .exclusions import (
    ExclusionState,
    build_exclude_glob,
    build_exclusion_state,
    is_explicitly_excluded,
)
from .extensions import (
    extension_key,
    extension_set,
    normalize_extension,
    normalize_extensions,
    should_skip_extension,
)
from .local import GlobFilter, LocalFileSystem, expand_braces, is_glob_excluded
from .paths import is_within, normalize_fs_path, resolve_fs_path
from .scanner import (
    BATCH_SIZE,
    count_lines,
    count_text_lines,
    estimate_lines,
    is_oversized,
    scan_workspace,
)

__all__ = [
    "BATCH_SIZE",
    "ExclusionState",
    "GlobFilter",
    "LocalFileSystem",
    "build_exclude_glob",
    "build_exclusion_state",
    "count_lines",
    "count_text_lines",
    "estimate_lines",
    "expand_braces",
    "extension_key",
    "extension_set",
    "is_explicitly_excluded",
    "is_glob_excluded",
    "is_oversized",
    "is_within",
    "normalize_extension",
    "normalize_extensions",
    "normalize_fs_path",
    "resolve_fs_path",
    "scan_workspace",
    "should_skip_extension",
]
