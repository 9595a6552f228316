"""Error handling for the configuration system."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Base exception for all configuration-related errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:  # pyright: ignore[reportAny] # Flexible config error context
        """Initialize ConfigError.

        Args:
            message: Error message
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.context: dict[str, Any] = context or {}  # pyright: ignore[reportAny] # Flexible config error context


class ConfigLoadError(ConfigError):
    """Exception raised when a configuration or state file cannot be loaded."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportAny] # Flexible config error context
    ) -> None:
        """Initialize ConfigLoadError.

        Args:
            message: Error message
            file_path: Path to the file that failed to load
            context: Additional context information
        """
        full_context = context or {}
        if file_path is not None:
            full_context["file_path"] = file_path

        super().__init__(message, full_context)
        self.file_path: str | None = file_path


class EnvLoadError(ConfigError):
    """Exception raised when environment variable loading fails."""

    def __init__(
        self,
        message: str,
        env_var: str | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportAny] # Flexible config error context
    ) -> None:
        """Initialize EnvLoadError.

        Args:
            message: Error message
            env_var: Environment variable name that caused the error
            context: Additional context information
        """
        full_context = context or {}
        if env_var is not None:
            full_context["env_var"] = env_var

        super().__init__(message, full_context)
        self.env_var: str | None = env_var


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(
        self,
        message: str,
        pydantic_error: ValidationError | None = None,
        context: dict[str, Any] | None = None,  # pyright: ignore[reportAny] # Flexible config error context
    ) -> None:
        """Initialize ConfigValidationError.

        Args:
            message: Error message
            pydantic_error: Original Pydantic ValidationError
            context: Additional context information
        """
        full_context = context or {}
        if pydantic_error is not None:
            full_context["validation_errors"] = self._format_validation_errors(pydantic_error)

        super().__init__(message, full_context)
        self.pydantic_error: ValidationError | None = pydantic_error

    def __str__(self) -> str:
        base = super().__str__()
        if self.pydantic_error is None:
            return base
        lines = [base]
        for err in self.pydantic_error.errors():
            field_path = ".".join(str(loc) for loc in err["loc"])
            lines.append(f"  - {field_path}: {err['msg']}")
        return "\n".join(lines)

    def _format_validation_errors(self, error: ValidationError) -> list[dict[str, Any]]:  # pyright: ignore[reportAny] # Flexible error formatting
        """Format Pydantic validation errors for better readability.

        Args:
            error: Pydantic ValidationError

        Returns:
            List of formatted error dictionaries
        """
        formatted_errors: list[dict[str, Any]] = []  # pyright: ignore[reportAny] # Flexible error formatting
        for err in error.errors():
            formatted_errors.append({
                "field": ".".join(str(loc) for loc in err["loc"]),
                "message": err["msg"],
                "type": err["type"],
                "input": err.get("input"),
            })
        return formatted_errors


def log_config_error(error: ConfigError, level: int = logging.WARNING) -> None:
    """Log configuration error with its context.

    Args:
        error: Configuration error to log
        level: Logging level (default: WARNING)
    """
    message = str(error)
    if error.context:
        context_str = ", ".join(f"{k}={v}" for k, v in error.context.items())  # pyright: ignore[reportAny] # Flexible context values
        message = f"{message} (context: {context_str})"

    logger.log(level, message)


def suggest_config_fix(error: ConfigError) -> str | None:
    """Suggest potential fixes for configuration errors.

    Args:
        error: Configuration error

    Returns:
        Suggested fix or None if no suggestion available
    """
    if isinstance(error, ConfigLoadError):
        if error.file_path:
            return f"Check that the file exists and is valid YAML: {error.file_path}"
        return "Check that the configuration file exists and is valid YAML"

    if isinstance(error, EnvLoadError):
        if error.env_var:
            return f"Check the format and value of environment variable: {error.env_var}"
        return "Check the format and values of environment variables"

    if isinstance(error, ConfigValidationError) and error.pydantic_error:
        error_count = len(error.pydantic_error.errors())
        if error_count == 1:
            err = error.pydantic_error.errors()[0]
            field_path = ".".join(str(loc) for loc in err["loc"])
            return f"Fix validation error in field '{field_path}': {err['msg']}"
        return f"Fix {error_count} validation errors in the configuration"

    return None
