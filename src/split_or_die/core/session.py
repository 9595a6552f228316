"""Scan session coordinating bulk scans, saves and exclusion toggles.

The session owns the result set, the diagnostics sink and the scan
generation counter. Each event (scan, save, toggle) is handled on the
event loop's single control flow; the only concurrency is inside one
bulk scan.

Generation discipline: every bulk scan takes a new generation number and
only applies its results if no newer scan started while it was running.
Single-file checks are not generation-guarded and apply immediately, so a
still-current bulk scan finishing later may overwrite them; both paths
converge on the next event.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence

from split_or_die.config.models import ScannerConfig
from split_or_die.config.store import (
    add_excluded_extension,
    remove_excluded_extension,
    update_size_threshold,
)
from split_or_die.core.data.filesystem.exclusions import (
    ExclusionState,
    build_exclusion_state,
    is_explicitly_excluded,
)
from split_or_die.core.data.filesystem.extensions import normalize_extension
from split_or_die.core.data.filesystem.paths import normalize_fs_path, path_scheme, resolve_fs_path
from split_or_die.core.data.filesystem.scanner import scan_workspace
from split_or_die.core.diagnostics import DiagnosticCollection, create_diagnostic
from split_or_die.core.state import (
    STATE_EXCLUDED_FILES,
    STATE_EXCLUDED_FOLDERS,
    add_excluded_file,
    add_excluded_folder,
    migrate_excluded_extensions,
    remove_excluded_file,
    remove_excluded_folder,
)
from split_or_die.core.updater import check_file
from split_or_die.core.view import build_view_state
from split_or_die.types.aliases import ResultSet
from split_or_die.types.models import ScanEntry, ViewState
from split_or_die.types.protocols import DiagnosticsSink, FileSystem, SettingsStore, StateStore
from split_or_die.utils.formatting import format_file_count
from split_or_die.utils.logging import clear_correlation_id, log_with_context, set_correlation_id

__all__ = ["ScanSession"]

type ChangeListener = Callable[["ScanSession"], None]


class ScanSession:
    """Running scanner state for one set of workspace roots."""

    def __init__(
        self,
        roots: Sequence[str],
        *,
        fs: FileSystem,
        state: StateStore,
        settings: SettingsStore,
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        """Initialize the session.

        Args:
            roots: Workspace root folders (may be empty)
            fs: Filesystem collaborator
            state: Per-project persisted state
            settings: Scanner settings
            diagnostics: Diagnostics sink (defaults to an in-memory collection)
        """
        self.roots: tuple[str, ...] = tuple(os.path.abspath(root) for root in roots)
        self.fs: FileSystem = fs
        self.state: StateStore = state
        self.settings: SettingsStore = settings
        self.diagnostics: DiagnosticsSink = diagnostics if diagnostics is not None else DiagnosticCollection()

        self._results: ResultSet = {}
        self._generation: int = 0
        self._summary: str | None = None
        self._listeners: list[ChangeListener] = []
        self._logger: logging.Logger = logging.getLogger(__name__)

    @property
    def results(self) -> ResultSet:
        """Current oversized files keyed by normalized path."""
        return self._results

    @property
    def generation(self) -> int:
        """Generation of the most recently started bulk scan."""
        return self._generation

    @property
    def summary(self) -> str | None:
        """Summary label of the last applied bulk scan."""
        return self._summary

    def add_listener(self, listener: ChangeListener) -> None:
        """Register a callback run whenever the results change."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in self._listeners:
            listener(self)

    def config(self) -> ScannerConfig:
        return self.settings.load()

    def build_exclusion(self, config: ScannerConfig | None = None) -> ExclusionState:
        """Snapshot the exclusion rules currently in effect."""
        config = config or self.config()
        return build_exclusion_state(
            self.state.get_list(STATE_EXCLUDED_FOLDERS),
            self.state.get_list(STATE_EXCLUDED_FILES),
            config.exclude_extensions,
            config.exclude_globs,
        )

    def migrate(self) -> bool:
        """Move legacy extension exclusions from state into settings."""
        return migrate_excluded_extensions(self.state, self.settings)

    async def start(self) -> None:
        """Migrate legacy state and run the startup scan if enabled."""
        _ = self.migrate()
        config = self.config()
        if config.enable and config.run_on_startup:
            _ = await self.run_scan()

    async def run_scan(self) -> bool:
        """Run a bulk scan and apply its results unless superseded.

        Returns:
            True if the results were applied, False if a newer scan started
            before this one finished
        """
        self._generation += 1
        generation = self._generation
        set_correlation_id(f"scan-{generation}")
        try:
            config = self.config()
            if not config.enable:
                self.diagnostics.clear()
                self._results.clear()
                self._summary = None
                self._notify()
                return True

            exclusion = self.build_exclusion(config)
            entries = await scan_workspace(self.roots, exclusion, config.threshold_bytes, self.fs)

            if generation != self._generation:
                log_with_context(
                    self._logger,
                    logging.DEBUG,
                    "Discarding superseded scan results",
                    extra={"scan_generation": generation, "current_generation": self._generation},
                )
                return False

            self.diagnostics.clear()
            self._results.clear()
            for key, entry in entries.items():
                self._results[key] = entry
                self.diagnostics.set(key, [create_diagnostic(entry.size, entry.line_count)])

            self._summary = format_file_count(len(entries), config.size_threshold_kb)
            self._logger.info("Split or Die: %s", self._summary)
            self._notify()
            return True
        finally:
            clear_correlation_id()

    async def check_file(self, path: str, *, content: str | None = None) -> ScanEntry | None:
        """Re-check one file immediately, regardless of the save settings."""
        config = self.config()
        entry = await check_file(
            path,
            self.build_exclusion(config),
            config.threshold_bytes,
            self._results,
            self.diagnostics,
            self.fs,
            self.roots,
            content=content,
        )
        self._notify()
        return entry

    async def handle_save(self, path: str, *, content: str | None = None) -> ScanEntry | None:
        """Re-check a saved file if scanning and run-on-save are enabled."""
        config = self.config()
        if not config.enable or not config.run_on_save:
            return None
        return await self.check_file(path, content=content)

    def is_excluded(self, path: str) -> bool:
        """Whether path is explicitly excluded by a folder or file rule."""
        if path_scheme(path) not in (None, "file"):
            return False
        return is_explicitly_excluded(resolve_fs_path(path), self.build_exclusion())

    def view_state(self) -> ViewState:
        """Display-ready snapshot of results and exclusions."""
        config = self.config()
        return build_view_state(config, self.build_exclusion(config), self._results, self.roots)

    @staticmethod
    def _file_target(path: str) -> str | None:
        if path_scheme(path) not in (None, "file"):
            return None
        return os.path.abspath(resolve_fs_path(path))

    async def exclude_folder(self, path: str) -> bool:
        target = self._file_target(path)
        if target is None:
            return False
        changed = add_excluded_folder(self.state, target)
        _ = await self.run_scan()
        return changed

    async def include_folder(self, path: str) -> bool:
        target = self._file_target(path)
        if target is None:
            return False
        changed = remove_excluded_folder(self.state, target)
        _ = await self.run_scan()
        return changed

    async def exclude_file(self, path: str) -> bool:
        target = self._file_target(path)
        if target is None:
            return False
        changed = add_excluded_file(self.state, target)
        _ = await self.run_scan()
        return changed

    async def include_file(self, path: str) -> bool:
        target = self._file_target(path)
        if target is None:
            return False
        changed = remove_excluded_file(self.state, target)
        _ = await self.run_scan()
        return changed

    async def toggle_folder(self, path: str) -> bool:
        """Exclude the folder, or re-include it if already excluded.

        Returns:
            True if the folder is excluded afterwards
        """
        target = self._file_target(path)
        if target is None:
            return False
        if normalize_fs_path(target) in self.build_exclusion().excluded_folder_set:
            _ = await self.include_folder(target)
            return False
        _ = await self.exclude_folder(target)
        return True

    async def toggle_file(self, path: str) -> bool:
        """Exclude the file, or re-include it if already excluded.

        Returns:
            True if the file is excluded afterwards
        """
        target = self._file_target(path)
        if target is None:
            return False
        if normalize_fs_path(target) in self.build_exclusion().excluded_file_set:
            _ = await self.include_file(target)
            return False
        _ = await self.exclude_file(target)
        return True

    async def toggle_extension(self, path: str) -> bool | None:
        """Exclude the file's extension, or re-include it if already excluded.

        Returns:
            True if the extension is excluded afterwards, False if it was
            re-included, None if the file has no usable extension
        """
        target = self._file_target(path)
        if target is None:
            return None
        extension = normalize_extension(os.path.splitext(target)[1])
        if extension is None:
            return None
        if extension in self.build_exclusion().exclude_extensions:
            _ = remove_excluded_extension(self.settings, extension)
            excluded = False
        else:
            _ = add_excluded_extension(self.settings, extension)
            excluded = True
        _ = await self.run_scan()
        return excluded

    async def add_extension(self, value: str) -> bool:
        """Exclude an extension entered by the user; invalid input is ignored."""
        if normalize_extension(value) is None:
            return False
        changed = add_excluded_extension(self.settings, value)
        _ = await self.run_scan()
        return changed

    async def remove_extension(self, value: str) -> bool:
        """Re-include an extension entered by the user; invalid input is ignored."""
        if normalize_extension(value) is None:
            return False
        changed = remove_excluded_extension(self.settings, value)
        _ = await self.run_scan()
        return changed

    async def update_threshold(self, value: float) -> int | None:
        """Store a new threshold in KB and rescan; non-finite input is ignored."""
        stored = update_size_threshold(self.settings, value)
        if stored is None:
            return None
        _ = await self.run_scan()
        return stored
