"""Command-line interface for Split or Die."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from pathlib import Path

import click

from split_or_die.app.runner import ApplicationRunner
from split_or_die.config.exceptions import ConfigError, log_config_error, suggest_config_fix
from split_or_die.core.session import ScanSession
from split_or_die.core.view import as_relative_path, size_label
from split_or_die.types.models import ViewEntry, ViewState
from split_or_die.utils.formatting import format_file_count


def validate_config_path(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: Path | None,
) -> Path | None:
    """Validate configuration file path.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Path value to validate

    Returns:
        Validated Path object

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    if value.exists() and value.is_dir():
        raise click.BadParameter("Configuration path must be a file, not a directory")

    valid_extensions = {".yaml", ".yml"}
    if value.suffix.lower() not in valid_extensions:
        extensions_str = ", ".join(sorted(valid_extensions))
        raise click.BadParameter(f"Invalid configuration file extension. Supported extensions: {extensions_str}")

    return value


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Returns:
        Normalized log level (uppercase)

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()

    valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if normalized_value not in valid_levels:
        raise click.BadParameter(f'Invalid log level "{value}". Valid options: {", ".join(sorted(valid_levels))}')

    return normalized_value


try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("split-or-die")
except (ImportError, PackageNotFoundError):
    __version__ = "unknown"


def _runner(ctx: click.Context) -> ApplicationRunner:
    runner = ctx.find_object(ApplicationRunner)
    if runner is None:
        raise click.ClickException("No application context")
    return runner


def config_errors[**P, R](func: Callable[P, R]) -> Callable[P, R]:
    """Turn configuration failures into a clean CLI error."""

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except ConfigError as e:
            log_config_error(e, logging.DEBUG)
            suggestion = suggest_config_fix(e)
            message = f"{e}\n{suggestion}" if suggestion else str(e)
            raise click.ClickException(message) from e

    return wrapper


def echo_summary(view: ViewState) -> None:
    click.echo(f"Split or Die: {format_file_count(len(view.oversized_files), view.size_threshold_kb)}")


def echo_session_summary(session: ScanSession) -> None:
    count = len(session.results)
    click.echo(f"Split or Die: {format_file_count(count, session.config().size_threshold_kb)}")


def echo_oversized(view: ViewState) -> None:
    for entry in view.oversized_files:
        click.echo(f"{entry.label}  {entry.size_label}")
    echo_summary(view)


def _echo_entries(title: str, entries: tuple[ViewEntry, ...]) -> None:
    click.echo(f"{title}:")
    if not entries:
        click.echo("  (none)")
    for entry in entries:
        click.echo(f"  {entry.label}")


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    default=None,
    callback=validate_config_path,
    help="Configuration file path (.yaml or .yml). If not specified, searches the project root and home directory.",
)
@click.option(
    "--log-level",
    "-l",
    type=str,
    default=None,
    callback=validate_log_level,
    help="Logging verbosity level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
@click.option(
    "--root",
    "-r",
    "roots",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    multiple=True,
    help="Workspace root to scan (repeatable, defaults to the current directory)",
)
@click.version_option(version=__version__, prog_name="Split or Die")
@click.pass_context
@config_errors
def cli(ctx: click.Context, config: Path | None, log_level: str | None, roots: tuple[Path, ...]) -> None:
    """Split or Die - flag source files that have grown too large.

    Examples:

        # Scan the current directory
        split-or-die scan

        # Scan two roots with a custom config file
        split-or-die -r ./app -r ./lib --config ./split-or-die.yaml scan

        # Watch for changes
        split-or-die watch
    """
    runner = ApplicationRunner(roots or (Path.cwd(),), config_path=config, log_level=log_level)
    _ = runner.configure_logging()
    ctx.obj = runner


@cli.command()
@click.pass_context
@config_errors
def scan(ctx: click.Context) -> None:
    """Scan the workspace and list oversized files, largest first."""
    echo_oversized(_runner(ctx).scan())


@cli.command()
@click.argument("path")
@click.pass_context
@config_errors
def check(ctx: click.Context, path: str) -> None:
    """Check a single file against the current threshold."""
    runner = _runner(ctx)
    entry = runner.check(path)
    if entry is None:
        click.echo(f"{path}: not reported")
        return
    click.echo(f"{as_relative_path(entry.path, runner.session.roots)}  {size_label(entry)}")


def _toggle_command(group: click.Group, kind: str, action: str, help_text: str) -> None:
    @group.command(name=kind, help=help_text)
    @click.argument("path")
    @click.pass_context
    @config_errors
    def command(ctx: click.Context, path: str) -> None:
        runner = _runner(ctx)
        changed = runner.run_toggle(f"{action}_{kind}", path)
        if not changed:
            click.echo(f"No change for {kind} {path}")
        echo_summary(runner.status())


@cli.group()
def exclude() -> None:
    """Exclude a folder or file from scanning."""


@cli.group()
def include() -> None:
    """Re-include a previously excluded folder or file."""


_toggle_command(exclude, "folder", "exclude", "Exclude a folder and everything below it.")
_toggle_command(exclude, "file", "exclude", "Exclude a single file.")
_toggle_command(include, "folder", "include", "Re-include an excluded folder.")
_toggle_command(include, "file", "include", "Re-include an excluded file.")


@cli.group()
def extension() -> None:
    """Manage excluded file extensions."""


@extension.command(name="add")
@click.argument("value")
@click.pass_context
@config_errors
def extension_add(ctx: click.Context, value: str) -> None:
    """Exclude files with the given extension, e.g. ``log`` or ``.LOG``."""
    runner = _runner(ctx)
    if not runner.add_extension(value):
        click.echo(f"Warning: '{value}' is not a valid new extension; nothing changed", err=True)
        return
    echo_summary(runner.status())


@extension.command(name="remove")
@click.argument("value")
@click.pass_context
@config_errors
def extension_remove(ctx: click.Context, value: str) -> None:
    """Stop excluding files with the given extension."""
    runner = _runner(ctx)
    if not runner.remove_extension(value):
        click.echo(f"Warning: '{value}' is not an excluded extension; nothing changed", err=True)
        return
    echo_summary(runner.status())


@cli.command()
@click.argument("kb", type=float)
@click.pass_context
@config_errors
def threshold(ctx: click.Context, kb: float) -> None:
    """Set the size threshold in KB."""
    runner = _runner(ctx)
    stored = runner.update_threshold(kb)
    if stored is None:
        click.echo(f"Warning: '{kb}' is not a valid threshold; nothing changed", err=True)
        return
    click.echo(f"Threshold set to {stored} KB")
    echo_summary(runner.status())


@cli.command()
@click.pass_context
@config_errors
def status(ctx: click.Context) -> None:
    """Show the threshold and current exclusions."""
    view = _runner(ctx).status()
    click.echo(f"Threshold: {view.size_threshold_kb} KB")
    click.echo(f"Excluded extensions: {', '.join(view.excluded_extensions) or '(none)'}")
    _echo_entries("Excluded folders", view.excluded_folders)
    _echo_entries("Excluded files", view.excluded_files)


@cli.command()
@click.pass_context
@config_errors
def watch(ctx: click.Context) -> None:
    """Scan on startup and re-check files as they change, until interrupted."""
    runner = _runner(ctx)
    runner.session.add_listener(echo_session_summary)
    try:
        runner.watch()
    except KeyboardInterrupt:
        click.echo("\nShutting down gracefully...")
