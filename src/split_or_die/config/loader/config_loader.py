"""Configuration loader combining the YAML file and environment overrides."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from ..exceptions import ConfigValidationError
from ..models import MainConfig
from .env_loader import EnvLoader
from .yaml_loader import YamlLoader

# Configuration file discovery, in order of precedence
# 1. Project root
PROJECT_CONFIG_FILES: Final[tuple[str, ...]] = (
    "split-or-die.yaml",
    "split-or-die.yml",
    ".split-or-die.yaml",
    ".split-or-die.yml",
)

# 2. User home directory
HOME_CONFIG_FILES: Final[tuple[str, ...]] = (
    ".split-or-die.yaml",
    ".split-or-die.yml",
)


def discover_config_file(project_root: Path) -> Path | None:
    """Find the configuration file for a project.

    Args:
        project_root: Directory searched first

    Returns:
        Path to the first configuration file found, or None
    """
    for name in PROJECT_CONFIG_FILES:
        candidate = project_root / name
        if candidate.is_file():
            return candidate

    try:
        home_dir = Path.home()
    except (OSError, RuntimeError):
        # Path.home() can fail in some environments
        return None

    for name in HOME_CONFIG_FILES:
        candidate = home_dir / name
        if candidate.is_file():
            return candidate

    return None


def deep_merge(base: Mapping[str, object], override: Mapping[str, object]) -> dict[str, object]:
    """Recursively merge override into a copy of base.

    Nested mappings are merged key by key; any other value in override
    replaces the value in base.
    """
    result: dict[str, object] = copy.deepcopy(dict(base))
    for key, value in override.items():
        existing = result.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            result[key] = deep_merge(existing, value)  # pyright: ignore[reportUnknownArgumentType]
        else:
            result[key] = copy.deepcopy(value)
    return result


class ConfigLoader:
    """Loader for the complete configuration.

    Precedence, lowest first: model defaults, configuration file,
    environment variables.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env_loader: EnvLoader | None = None,
    ) -> None:
        """Initialize configuration loader.

        Args:
            config_path: Configuration file (None to use defaults and env only)
            env_loader: Environment loader (defaults to the SPLIT_OR_DIE_ prefix)
        """
        self.config_path: Path | None = config_path
        self.yaml_loader: YamlLoader = YamlLoader()
        self.env_loader: EnvLoader = env_loader or EnvLoader()

    def load_raw(self) -> dict[str, object]:
        """Load the merged, unvalidated configuration mapping.

        Raises:
            ConfigLoadError: If the configuration file cannot be parsed
            EnvLoadError: If an environment override is malformed
        """
        file_config: dict[str, object] = {}
        if self.config_path is not None and self.config_path.exists():
            file_config = self.yaml_loader.load(self.config_path)

        return deep_merge(file_config, self.env_loader.load())

    def load(self) -> MainConfig:
        """Load and validate the configuration.

        Raises:
            ConfigLoadError: If the configuration file cannot be parsed
            EnvLoadError: If an environment override is malformed
            ConfigValidationError: If validation fails
        """
        raw = self.load_raw()
        try:
            return MainConfig.model_validate(raw)
        except ValidationError as e:
            source = str(self.config_path) if self.config_path is not None else "environment"
            raise ConfigValidationError(
                f"Invalid configuration in {source}",
                pydantic_error=e,
            ) from e
