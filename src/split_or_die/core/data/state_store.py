"""Per-project persisted state stores.

State is a set of named string lists. Reading a key that was never
written yields an empty list; the backing file is created on first write.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Final

from split_or_die.config.exceptions import ConfigLoadError
from split_or_die.config.loader import YamlLoader
from split_or_die.utils.logging import get_logger

logger = get_logger(__name__)

STATE_DIR_NAME: Final[str] = ".split-or-die"
STATE_FILE_NAME: Final[str] = "state.yaml"


def default_state_path(project_root: Path) -> Path:
    """Location of the state file for a project."""
    return project_root / STATE_DIR_NAME / STATE_FILE_NAME


class MemoryStateStore:
    """State kept in memory only."""

    def __init__(self, initial: dict[str, list[str]] | None = None) -> None:
        self._data: dict[str, list[str]] = {key: list(values) for key, values in (initial or {}).items()}

    def get_list(self, key: str) -> list[str]:
        return list(self._data.get(key, []))

    def update_list(self, key: str, values: Sequence[str]) -> None:
        self._data[key] = list(values)


class YamlStateStore:
    """State persisted in a YAML file inside the project.

    A missing or unreadable file reads as empty state; an unreadable file
    is logged and left untouched until the next write replaces it.
    """

    def __init__(self, path: Path) -> None:
        self.path: Path = path
        self._yaml: YamlLoader = YamlLoader()

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            return self._yaml.load(self.path)
        except ConfigLoadError as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return {}

    def get_list(self, key: str) -> list[str]:
        value = self._read().get(key)
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str)]  # pyright: ignore[reportUnknownVariableType]

    def update_list(self, key: str, values: Sequence[str]) -> None:
        data = self._read()
        data[key] = list(values)
        self._yaml.dump(self.path, data)
