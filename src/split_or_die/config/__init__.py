"""Configuration management for split-or-die."""

from __future__ import annotations

from .exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    EnvLoadError,
    log_config_error,
    suggest_config_fix,
)
from .loader import ConfigLoader, discover_config_file
from .models import (
    DEFAULT_EXCLUDE_EXTENSIONS,
    DEFAULT_EXCLUDE_GLOBS,
    DEFAULT_SIZE_THRESHOLD_KB,
    ApplicationConfig,
    MainConfig,
    ScannerConfig,
)

__all__ = [
    # Exception classes
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "EnvLoadError",
    # Utility functions
    "log_config_error",
    "suggest_config_fix",
    # Loading
    "ConfigLoader",
    "discover_config_file",
    # Models
    "ApplicationConfig",
    "MainConfig",
    "ScannerConfig",
    "DEFAULT_EXCLUDE_EXTENSIONS",
    "DEFAULT_EXCLUDE_GLOBS",
    "DEFAULT_SIZE_THRESHOLD_KB",
]
