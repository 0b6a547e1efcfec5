"""procstatus CLI - decode process status words from the command line.

The CLI is built using Typer. Global options (--version, --config and the
logging overrides) are handled by the app callback, which runs before any
command; each command lives in its own module under ``commands/``.

Package structure:
    cli/
    ├── __init__.py           # This file - app assembly
    ├── helpers.py            # Session state, config and logging setup
    ├── output.py             # Rich formatting
    └── commands/
        ├── describe.py       # describe command
        ├── check.py          # check command
        └── signals.py        # signals command
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from procstatus import __version__

from . import helpers as helpers
from .commands import check, describe, signals
from .helpers import (
    load_config,
    set_log_file,
    set_log_format,
    set_log_level,
)
from .output import console

# =============================================================================
# Typer app definition
# =============================================================================

app = typer.Typer(
    name="procstatus",
    help="Decode and check process termination status words",
    add_completion=False,
)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_LOG_FORMATS = ("json", "console", "both")


# =============================================================================
# Global option callbacks
# =============================================================================


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"procstatus v{__version__}")
        raise typer.Exit()


def config_callback(value: Path | None) -> Path | None:
    """Load the config file before any command runs."""
    if value:
        load_config(value, console)
    return value


def log_level_callback(value: str | None) -> str | None:
    """Set log level from CLI option."""
    if value:
        if value.upper() not in _LOG_LEVELS:
            raise typer.BadParameter(f"must be one of {', '.join(_LOG_LEVELS)}")
        set_log_level(value)
    return value


def log_file_callback(value: Path | None) -> Path | None:
    """Set log file path from CLI option."""
    if value:
        set_log_file(value)
    return value


def log_format_callback(value: str | None) -> str | None:
    """Set log format from CLI option."""
    if value:
        if value.lower() not in _LOG_FORMATS:
            raise typer.BadParameter(f"must be one of {', '.join(_LOG_FORMATS)}")
        set_log_format(value)
    return value


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            callback=config_callback,
            help="YAML configuration file",
            envvar="PROCSTATUS_CONFIG",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            "-L",
            callback=log_level_callback,
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
            envvar="PROCSTATUS_LOG_LEVEL",
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            callback=log_file_callback,
            help="Path for log file output",
            envvar="PROCSTATUS_LOG_FILE",
        ),
    ] = None,
    log_format: Annotated[
        str | None,
        typer.Option(
            "--log-format",
            callback=log_format_callback,
            help="Log format: json, console, or both",
            envvar="PROCSTATUS_LOG_FORMAT",
        ),
    ] = None,
) -> None:
    """procstatus - decode and check process termination status words."""


# =============================================================================
# Command registration
# =============================================================================

app.command()(describe)
app.command()(check)
app.command()(signals)


__all__ = ["app", "main"]
