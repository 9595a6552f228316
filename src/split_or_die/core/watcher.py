"""Filesystem watcher feeding save events into a scan session.

watchdog delivers events on its observer thread; each one is handed to
the session on the event loop with ``asyncio.run_coroutine_threadsafe``,
so all result-set mutation stays on the loop's single control flow.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import Future

from watchdog.events import (
    DirCreatedEvent,
    DirDeletedEvent,
    DirModifiedEvent,
    DirMovedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from split_or_die.core.session import ScanSession
from split_or_die.types.models import ScanEntry
from split_or_die.utils.logging import get_logger

logger = get_logger(__name__)


def _as_str(path: bytes | str) -> str:
    return path.decode() if isinstance(path, bytes) else path


def _log_failure(future: Future[ScanEntry | None]) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("File check failed: %s", exc, exc_info=exc)


class SaveEventHandler(FileSystemEventHandler):
    """Routes file events to ``ScanSession.handle_save``.

    Deleted files are re-checked too; the failed stat drops them from the
    result set. A move re-checks both the old and the new path.
    """

    def __init__(self, session: ScanSession, loop: asyncio.AbstractEventLoop) -> None:
        super().__init__()
        self.session: ScanSession = session
        self.loop: asyncio.AbstractEventLoop = loop

    def _submit(self, path: str) -> Future[ScanEntry | None]:
        future = asyncio.run_coroutine_threadsafe(self.session.handle_save(path), self.loop)
        future.add_done_callback(_log_failure)
        return future

    def dispatch(self, event: FileSystemEvent) -> None:
        if isinstance(event, (DirCreatedEvent, DirModifiedEvent, DirDeletedEvent, DirMovedEvent)):
            return

        if isinstance(event, FileMovedEvent):
            _ = self._submit(_as_str(event.src_path))
            _ = self._submit(_as_str(event.dest_path))
        elif isinstance(event, (FileCreatedEvent, FileModifiedEvent, FileDeletedEvent)):
            _ = self._submit(_as_str(event.src_path))


class WorkspaceWatcher:
    """Watches every workspace root of a session recursively."""

    def __init__(self, session: ScanSession) -> None:
        self.session: ScanSession = session
        self._observer: Observer | None = None

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Start watching. Must be called from the loop thread unless loop is given."""
        if self._observer is not None:
            return
        handler = SaveEventHandler(self.session, loop or asyncio.get_running_loop())
        observer = Observer()
        for root in self.session.roots:
            _ = observer.schedule(handler, root, recursive=True)
            logger.info("Watching %s", root)
        observer.start()
        self._observer = observer

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
        logger.info("Stopped watching")

    async def run(self, stop_event: asyncio.Event) -> None:
        """Watch until stop_event is set."""
        self.start()
        try:
            _ = await stop_event.wait()
        finally:
            self.stop()
