"""Configuration schema for split-or-die.

Settings are validated with Pydantic. Every field has a default so that a
missing or empty configuration file yields a working scanner.
"""

from __future__ import annotations

from typing import Annotated, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SIZE_THRESHOLD_KB: Final[int] = 20

DEFAULT_EXCLUDE_EXTENSIONS: Final[tuple[str, ...]] = (
    "md",
    "txt",
    "yaml",
    "yml",
    "toml",
    "json",
)

DEFAULT_EXCLUDE_GLOBS: Final[tuple[str, ...]] = (
    "**/node_modules/**",
    "**/.git/**",
    "**/dist/**",
    "**/build/**",
    "**/.svelte-kit/**",
    "**/.vite/**",
    "**/coverage/**",
    "**/__snapshots__/**",
    "**/paraglide/**",
)


class BaseConfig(BaseModel):
    """Base configuration model with common settings."""

    model_config: ConfigDict = ConfigDict(  # pyright: ignore[reportIncompatibleVariableOverride]
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )


class ScannerConfig(BaseConfig):
    """Configuration for the workspace scanner.

    Mirrors the user-facing settings: the size threshold, the glob and
    extension exclusions, and when scans are triggered.
    """

    enable: Annotated[
        bool,
        Field(description="Enable scanning and diagnostics"),
    ] = True
    size_threshold_kb: Annotated[
        int,
        Field(description="Files strictly larger than this many KB are reported"),
    ] = DEFAULT_SIZE_THRESHOLD_KB
    exclude_globs: Annotated[
        list[str],
        Field(description="Glob patterns excluded from enumeration"),
    ] = list(DEFAULT_EXCLUDE_GLOBS)
    exclude_extensions: Annotated[
        list[str],
        Field(description="File extensions (without dot) never scanned"),
    ] = list(DEFAULT_EXCLUDE_EXTENSIONS)
    run_on_startup: Annotated[
        bool,
        Field(description="Run a workspace scan when a session starts"),
    ] = True
    run_on_save: Annotated[
        bool,
        Field(description="Re-check a file each time it is saved"),
    ] = True

    @field_validator("exclude_globs", "exclude_extensions", mode="after")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Strip patterns and drop empty entries."""
        return [pattern.strip() for pattern in v if pattern.strip()]

    @property
    def threshold_bytes(self) -> int:
        """Threshold converted to bytes, never below 1 KB."""
        return max(1, self.size_threshold_kb) * 1024


class ApplicationConfig(BaseConfig):
    """Configuration for application-level settings."""

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "WARNING"
    syslog_enabled: Annotated[
        bool,
        Field(description="Enable syslog integration"),
    ] = False


class MainConfig(BaseConfig):
    """Top-level configuration container.

    Sections:
    - scanner: Threshold, exclusions and triggers
    - application: Logging settings
    """

    scanner: Annotated[
        ScannerConfig,
        Field(description="Workspace scanner configuration"),
    ] = ScannerConfig()
    application: Annotated[
        ApplicationConfig,
        Field(description="Application-level configuration"),
    ] = ApplicationConfig()
