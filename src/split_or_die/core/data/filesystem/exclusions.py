"""Exclusion state: merged glob filter plus explicit folder/file exclusions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from split_or_die.config.models import DEFAULT_EXCLUDE_GLOBS

from .extensions import extension_set
from .paths import is_within, normalize_fs_path


@dataclass(slots=True, frozen=True)
class ExclusionState:
    """Immutable snapshot of every exclusion rule in effect.

    Attributes:
        exclude_extensions: Canonical excluded extensions
        excluded_folder_set: Normalized excluded folders
        excluded_file_set: Normalized excluded files
        excluded_folders: Excluded folders as entered, for display
        excluded_files: Excluded files as entered, for display
        exclude_glob: Compiled enumeration filter (None for no filter)
    """

    exclude_extensions: frozenset[str]
    excluded_folder_set: frozenset[str]
    excluded_file_set: frozenset[str]
    excluded_folders: tuple[str, ...]
    excluded_files: tuple[str, ...]
    exclude_glob: str | None


def build_exclude_glob(patterns: Iterable[str]) -> str | None:
    """Compile glob patterns into a single filter expression.

    Patterns are trimmed, empty ones dropped and duplicates removed in
    first-seen order.

    Returns:
        None for no patterns, the pattern itself for one, otherwise a
        brace-grouped alternation

    Examples:
        >>> build_exclude_glob(["**/dist/**", " ", "**/dist/**"])
        '**/dist/**'
        >>> build_exclude_glob(["**/a/**", "**/b/**"])
        '{**/a/**,**/b/**}'
    """
    unique = list(dict.fromkeys(p.strip() for p in patterns if p.strip()))
    if not unique:
        return None
    if len(unique) == 1:
        return unique[0]
    return "{" + ",".join(unique) + "}"


def _string_entries(values: Iterable[object]) -> tuple[str, ...]:
    return tuple(value for value in values if isinstance(value, str))


def build_exclusion_state(
    persisted_folders: Sequence[object],
    persisted_files: Sequence[object],
    configured_extensions: Iterable[str],
    configured_globs: Iterable[str],
    default_globs: Iterable[str] = DEFAULT_EXCLUDE_GLOBS,
) -> ExclusionState:
    """Merge persisted and configured exclusions into one snapshot.

    Never fails: malformed persisted entries are kept as literal strings
    that simply match nothing, and non-string entries are dropped.
    """
    folders = _string_entries(persisted_folders)
    files = _string_entries(persisted_files)
    return ExclusionState(
        exclude_extensions=extension_set(configured_extensions),
        excluded_folder_set=frozenset(normalize_fs_path(entry) for entry in folders),
        excluded_file_set=frozenset(normalize_fs_path(entry) for entry in files),
        excluded_folders=folders,
        excluded_files=files,
        exclude_glob=build_exclude_glob([*default_globs, *configured_globs]),
    )


def is_explicitly_excluded(path: str, exclusion: ExclusionState) -> bool:
    """Check a path against the excluded files and folders.

    Extension exclusion is a separate check (see should_skip_extension).
    """
    normalized = normalize_fs_path(path)
    if normalized in exclusion.excluded_file_set:
        return True
    return any(is_within(normalized, folder) for folder in exclusion.excluded_folder_set)
