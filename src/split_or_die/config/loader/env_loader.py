"""Environment variable configuration loader."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import cast

from ..exceptions import EnvLoadError


class EnvLoader:
    """Environment variable loader with nesting and type conversion.

    ``SPLIT_OR_DIE_SCANNER__SIZE_THRESHOLD_KB=40`` becomes
    ``{"scanner": {"size_threshold_kb": 40}}``: the prefix is stripped, the
    remainder is lowercased and ``__`` separates nesting levels.
    """

    def __init__(
        self,
        prefix: str = "SPLIT_OR_DIE_",
        convert_types: bool = True,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize EnvLoader.

        Args:
            prefix: Prefix for environment variables to load
            convert_types: Whether to attempt automatic type conversion
            environ: Environment mapping (defaults to os.environ)
        """
        self.prefix: str = prefix
        self.convert_types: bool = convert_types
        self.environ: Mapping[str, str] = environ if environ is not None else os.environ

    def load(self) -> dict[str, object]:
        """Load configuration from environment variables.

        Returns:
            Dictionary containing the loaded configuration

        Raises:
            EnvLoadError: If a JSON-looking value cannot be parsed
        """
        config: dict[str, object] = {}

        for env_var, raw_value in self.environ.items():
            if not env_var.startswith(self.prefix):
                continue

            config_key = env_var[len(self.prefix):]
            if not config_key:
                continue

            config_path = config_key.lower().replace("__", ".")

            value: object = raw_value
            if self.convert_types:
                value = self._convert_value(raw_value, env_var)

            self._set_nested_value(config, config_path, value)

        return config

    def _convert_value(self, value: str, env_var: str) -> object:
        """Convert string value to appropriate Python type.

        Raises:
            EnvLoadError: If JSON parsing fails
        """
        if not value:
            return value

        bool_value = self._try_bool_conversion(value)
        if bool_value is not None:
            return bool_value

        numeric_value = self._try_numeric_conversion(value)
        if numeric_value is not None:
            return numeric_value

        # JSON for lists and mappings
        if value.startswith(("[", "{")):
            try:
                return cast(object, json.loads(value))
            except json.JSONDecodeError as e:
                raise EnvLoadError(
                    f"Failed to parse JSON for {env_var}: {e}",
                    env_var,
                ) from e

        return value

    def _try_bool_conversion(self, value: str) -> bool | None:
        lower_value = value.lower()
        if lower_value in ("true", "yes", "on"):
            return True
        elif lower_value in ("false", "no", "off"):
            return False
        return None

    def _try_numeric_conversion(self, value: str) -> int | float | None:
        try:
            if "." not in value and "e" not in value.lower():
                return int(value)
            return float(value)
        except ValueError:
            return None

    def _set_nested_value(self, config: dict[str, object], path: str, value: object) -> None:
        """Set a value in a nested dictionary using dot notation."""
        keys = path.split(".")
        current: dict[str, object] = config

        for key in keys[:-1]:
            if key not in current or not isinstance(current[key], dict):
                current[key] = {}
            current = current[key]  # pyright: ignore[reportAssignmentType]

        current[keys[-1]] = value
