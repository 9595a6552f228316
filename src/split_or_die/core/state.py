"""Folder and file exclusion toggles over the persisted state store.

All operations are idempotent: adding a path that is already present, or
removing one that is not, leaves the stored list unchanged. Paths are
compared by their normalized form, so ``/a/b/`` and ``/a/b`` are the same
entry. The original spelling of an added path is kept for display.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from split_or_die.config.store import merge_excluded_extensions
from split_or_die.core.data.filesystem.paths import normalize_fs_path, resolve_fs_path
from split_or_die.types.protocols import SettingsStore, StateStore
from split_or_die.utils.logging import get_logger

logger = get_logger(__name__)

STATE_EXCLUDED_FOLDERS: Final[str] = "splitOrDie.excludedFolders"
STATE_EXCLUDED_FILES: Final[str] = "splitOrDie.excludedFiles"
# Legacy location of extension exclusions, migrated into settings
STATE_EXCLUDED_EXTENSIONS: Final[str] = "splitOrDie.excludedExtensions"


def add_unique_path(entries: Sequence[str], path: str) -> list[str]:
    """Return entries with path appended unless an equivalent path is present."""
    normalized = normalize_fs_path(path)
    if any(normalize_fs_path(entry) == normalized for entry in entries):
        return list(entries)
    return [*entries, path]


def remove_path(entries: Sequence[str], path: str) -> list[str]:
    """Return entries without any path equivalent to path.

    ``file:`` URIs are resolved before comparison.
    """
    target = normalize_fs_path(resolve_fs_path(path))
    return [entry for entry in entries if normalize_fs_path(entry) != target]


def _add(state: StateStore, key: str, path: str) -> bool:
    current = state.get_list(key)
    updated = add_unique_path(current, resolve_fs_path(path))
    if updated == current:
        return False
    state.update_list(key, updated)
    logger.debug("Added %s to %s", path, key)
    return True


def _remove(state: StateStore, key: str, path: str) -> bool:
    current = state.get_list(key)
    updated = remove_path(current, path)
    if updated == current:
        return False
    state.update_list(key, updated)
    logger.debug("Removed %s from %s", path, key)
    return True


def add_excluded_folder(state: StateStore, path: str) -> bool:
    """Exclude a folder. Returns True if the stored list changed."""
    return _add(state, STATE_EXCLUDED_FOLDERS, path)


def remove_excluded_folder(state: StateStore, path: str) -> bool:
    """Re-include a folder. Returns True if the stored list changed."""
    return _remove(state, STATE_EXCLUDED_FOLDERS, path)


def add_excluded_file(state: StateStore, path: str) -> bool:
    """Exclude a file. Returns True if the stored list changed."""
    return _add(state, STATE_EXCLUDED_FILES, path)


def remove_excluded_file(state: StateStore, path: str) -> bool:
    """Re-include a file. Returns True if the stored list changed."""
    return _remove(state, STATE_EXCLUDED_FILES, path)


def migrate_excluded_extensions(state: StateStore, settings: SettingsStore) -> bool:
    """Move legacy extension exclusions from state into settings.

    Returns:
        True if a legacy list was found and migrated
    """
    legacy = state.get_list(STATE_EXCLUDED_EXTENSIONS)
    if not legacy:
        return False
    _ = merge_excluded_extensions(settings, legacy)
    state.update_list(STATE_EXCLUDED_EXTENSIONS, [])
    logger.info("Migrated %d legacy extension exclusions into settings", len(legacy))
    return True
