"""YAML configuration loader."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import yaml

from ..exceptions import ConfigLoadError


class YamlLoader:
    """Loader and writer for YAML mapping files."""

    def load(self, path: Path) -> dict[str, object]:
        """Load a mapping from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Parsed mapping (empty for empty or null documents)

        Raises:
            ConfigLoadError: If the file cannot be read or parsed, or does not
                contain a mapping
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = yaml.safe_load(f)  # pyright: ignore[reportAny] # yaml.safe_load returns Any
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(f"Failed to load {path}: {e}", file_path=str(path)) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigLoadError(
                f"Expected a mapping at the top level of {path}",
                file_path=str(path),
            )
        return content  # pyright: ignore[reportUnknownVariableType] # content is dict after isinstance check

    def dump(self, path: Path, data: Mapping[str, object]) -> None:
        """Write a mapping to a YAML file, creating parent directories.

        Raises:
            ConfigLoadError: If the file cannot be written
        """
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(dict(data), f, sort_keys=False, default_flow_style=False)
        except OSError as e:
            raise ConfigLoadError(f"Failed to write {path}: {e}", file_path=str(path)) from e
