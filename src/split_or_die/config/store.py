"""Settings stores and the setting-level toggle operations.

A settings store exposes the validated scanner settings and persists
single-key updates. Extension exclusions and the size threshold are
settings, so their toggles live here rather than in the per-project
state store.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from split_or_die.core.data.filesystem.extensions import (
    normalize_extension,
    normalize_extensions,
)
from split_or_die.types.protocols import SettingsStore
from split_or_die.utils.logging import get_logger

from .exceptions import ConfigValidationError
from .loader import ConfigLoader, YamlLoader
from .models import ScannerConfig

logger = get_logger(__name__)

SCANNER_SECTION = "scanner"


class YamlSettingsStore:
    """Settings backed by the project's YAML configuration file.

    Reads go through ConfigLoader, so environment overrides apply.
    Writes only touch the ``scanner`` section of the file.
    """

    def __init__(self, config_path: Path, loader: ConfigLoader | None = None) -> None:
        self.config_path: Path = config_path
        self._loader: ConfigLoader = loader or ConfigLoader(config_path)
        self._yaml: YamlLoader = YamlLoader()

    def load(self) -> ScannerConfig:
        return self._loader.load().scanner

    def update(self, key: str, value: object) -> None:
        """Write ``scanner.<key>`` to the configuration file.

        Raises:
            ConfigValidationError: If the new value is invalid
            ConfigLoadError: If the file cannot be read or written
        """
        data: dict[str, object] = {}
        if self.config_path.exists():
            data = self._yaml.load(self.config_path)

        section = data.get(SCANNER_SECTION)
        scanner: dict[str, object] = dict(section) if isinstance(section, dict) else {}  # pyright: ignore[reportUnknownArgumentType]
        scanner[key] = value

        try:
            _ = ScannerConfig.model_validate(scanner)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid value for {key}", pydantic_error=e) from e

        data[SCANNER_SECTION] = scanner
        self._yaml.dump(self.config_path, data)
        logger.debug("Setting %s updated in %s", key, self.config_path)


class MemorySettingsStore:
    """In-memory settings for tests and throwaway sessions."""

    def __init__(self, config: ScannerConfig | None = None) -> None:
        self._config: ScannerConfig = config or ScannerConfig()

    def load(self) -> ScannerConfig:
        return self._config

    def update(self, key: str, value: object) -> None:
        data = self._config.model_dump()
        data[key] = value
        try:
            self._config = ScannerConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid value for {key}", pydantic_error=e) from e


def add_excluded_extension(settings: SettingsStore, value: str) -> bool:
    """Add an extension to the excluded set.

    Returns:
        True if the settings changed; False for invalid input or an
        extension that is already excluded
    """
    normalized = normalize_extension(value)
    if normalized is None:
        logger.debug("Rejected extension input %r", value)
        return False

    current = normalize_extensions(settings.load().exclude_extensions)
    if normalized in current:
        return False

    settings.update("exclude_extensions", sorted([*current, normalized]))
    return True


def remove_excluded_extension(settings: SettingsStore, value: str) -> bool:
    """Remove an extension from the excluded set.

    Returns:
        True if the settings changed; False for invalid input or an
        extension that was not excluded
    """
    normalized = normalize_extension(value)
    if normalized is None:
        logger.debug("Rejected extension input %r", value)
        return False

    current = normalize_extensions(settings.load().exclude_extensions)
    if normalized not in current:
        return False

    settings.update("exclude_extensions", [ext for ext in current if ext != normalized])
    return True


def merge_excluded_extensions(settings: SettingsStore, extra: Iterable[str]) -> bool:
    """Merge extra extensions into the excluded set.

    Returns:
        True if the settings changed
    """
    current = normalize_extensions(settings.load().exclude_extensions)
    merged = normalize_extensions([*current, *extra])
    if merged == current:
        return False
    settings.update("exclude_extensions", merged)
    return True


def update_size_threshold(settings: SettingsStore, value: float) -> int | None:
    """Store a new size threshold in KB.

    Non-finite values are rejected. Anything else is rounded and clamped
    to at least 1.

    Returns:
        The stored threshold, or None if the value was rejected
    """
    if not math.isfinite(value):
        logger.debug("Rejected threshold input %r", value)
        return None

    next_kb = max(1, math.floor(value + 0.5))
    settings.update("size_threshold_kb", next_kb)
    return next_kb
