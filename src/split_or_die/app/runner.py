"""Application runner wiring configuration, stores and the scan session."""

from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import Sequence
from pathlib import Path

from split_or_die.config.loader import ConfigLoader, discover_config_file
from split_or_die.config.models import MainConfig
from split_or_die.config.store import YamlSettingsStore
from split_or_die.core.data.filesystem.local import LocalFileSystem
from split_or_die.core.data.state_store import YamlStateStore, default_state_path
from split_or_die.core.session import ScanSession
from split_or_die.core.watcher import WorkspaceWatcher
from split_or_die.types.models import ScanEntry, ViewState
from split_or_die.types.protocols import FileSystem, SettingsStore, StateStore
from split_or_die.utils.logging import configure_logging

DEFAULT_CONFIG_NAME = "split-or-die.yaml"


class ApplicationRunner:
    """Builds a ScanSession for a set of roots and runs commands against it."""

    def __init__(
        self,
        roots: Sequence[Path],
        *,
        config_path: Path | None = None,
        log_level: str | None = None,
        fs: FileSystem | None = None,
        state: StateStore | None = None,
        settings: SettingsStore | None = None,
    ) -> None:
        """Initialize the application runner.

        Args:
            roots: Workspace roots; the first one is the project root
            config_path: Configuration file (discovered when None)
            log_level: Override for the configured log level
            fs: Filesystem collaborator (local disk by default)
            state: State store (the project's state file by default)
            settings: Settings store (the configuration file by default)
        """
        self.roots: tuple[Path, ...] = tuple(root.resolve() for root in roots)
        self.project_root: Path = self.roots[0] if self.roots else Path.cwd()
        self.config_path: Path = (
            config_path
            or discover_config_file(self.project_root)
            or self.project_root / DEFAULT_CONFIG_NAME
        )
        self.log_level: str | None = log_level

        self.session: ScanSession = ScanSession(
            [str(root) for root in self.roots],
            fs=fs or LocalFileSystem(),
            state=state or YamlStateStore(default_state_path(self.project_root)),
            settings=settings or YamlSettingsStore(self.config_path),
        )

    def load_config(self) -> MainConfig:
        """Load the full configuration.

        Raises:
            ConfigError: If the configuration is unreadable or invalid
        """
        return ConfigLoader(self.config_path).load()

    def configure_logging(self) -> MainConfig:
        """Load the configuration and install logging handlers."""
        config = self.load_config()
        configure_logging(
            log_level=self.log_level or config.application.log_level,
            enable_syslog=config.application.syslog_enabled,
        )
        logging.getLogger(__name__).debug(
            "Configuration loaded",
            extra={"config_path": str(self.config_path), "roots": [str(root) for root in self.roots]},
        )
        return config

    def scan(self) -> ViewState:
        """Run one bulk scan and return the resulting view."""

        async def _scan() -> ViewState:
            _ = self.session.migrate()
            _ = await self.session.run_scan()
            return self.session.view_state()

        return asyncio.run(_scan())

    def check(self, path: str) -> ScanEntry | None:
        return asyncio.run(self.session.check_file(path))

    def run_toggle(self, action: str, path: str) -> bool | None:
        """Run a folder/file toggle by session method name, e.g. ``exclude_folder``."""
        method = getattr(self.session, action)
        return asyncio.run(method(path))

    def add_extension(self, value: str) -> bool:
        return asyncio.run(self.session.add_extension(value))

    def remove_extension(self, value: str) -> bool:
        return asyncio.run(self.session.remove_extension(value))

    def update_threshold(self, value: float) -> int | None:
        return asyncio.run(self.session.update_threshold(value))

    def status(self) -> ViewState:
        return self.session.view_state()

    def watch(self) -> None:
        """Scan on startup, then re-check changed files until interrupted."""
        asyncio.run(self._watch())

    async def _watch(self) -> None:
        logger = logging.getLogger(__name__)
        await self.session.start()

        stop_event = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop_event.set)

        try:
            await WorkspaceWatcher(self.session).run(stop_event)
        finally:
            for sig in (signal.SIGINT, signal.SIGTERM):
                _ = loop.remove_signal_handler(sig)
            logger.info("Watcher shutdown complete")
