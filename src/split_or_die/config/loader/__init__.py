"""Configuration loader module for YAML and environment variable loading."""

from __future__ import annotations

from .config_loader import ConfigLoader, deep_merge, discover_config_file
from .env_loader import EnvLoader
from .yaml_loader import YamlLoader

__all__ = [
    "ConfigLoader",
    "EnvLoader",
    "YamlLoader",
    "deep_merge",
    "discover_config_file",
]
