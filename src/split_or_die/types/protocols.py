"""Protocol definitions for host collaborators.

The scanner core never touches the operating system, persisted state or
settings directly. Each capability is a narrow structural protocol that
is injected into the session, so tests can substitute in-memory fakes.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from split_or_die.types.models import Diagnostic, FileStat

if TYPE_CHECKING:
    from split_or_die.config.models import ScannerConfig


@runtime_checkable
class FileSystem(Protocol):
    """Asynchronous, fallible filesystem primitives."""

    async def find_files(self, root: str, exclude_glob: str | None) -> list[str]:
        """Enumerate every file under root not matched by exclude_glob.

        Args:
            root: Workspace root folder to enumerate
            exclude_glob: Compiled exclusion glob (None for no filter)

        Returns:
            Absolute paths of candidate files
        """
        ...

    async def stat(self, path: str) -> FileStat:
        """Return the size of a file.

        Raises:
            OSError: If the file cannot be stat'ed
        """
        ...

    async def read_bytes(self, path: str) -> bytes:
        """Return the raw contents of a file.

        Raises:
            OSError: If the file cannot be read
        """
        ...


@runtime_checkable
class StateStore(Protocol):
    """Per-project persisted string lists with create-on-first-use."""

    def get_list(self, key: str) -> list[str]:
        """Return the list stored under key, or an empty list if missing."""
        ...

    def update_list(self, key: str, values: Sequence[str]) -> None:
        """Replace the list stored under key."""
        ...


@runtime_checkable
class SettingsStore(Protocol):
    """Typed scanner settings with write-back support."""

    def load(self) -> "ScannerConfig":
        """Return the current scanner settings."""
        ...

    def update(self, key: str, value: object) -> None:
        """Persist a single scanner setting."""
        ...


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Collection of per-file diagnostics."""

    def set(self, path: str, diagnostics: Sequence[Diagnostic]) -> None:
        """Replace the diagnostics attached to path."""
        ...

    def delete(self, path: str) -> None:
        """Remove any diagnostics attached to path."""
        ...

    def clear(self) -> None:
        """Remove all diagnostics."""
        ...
