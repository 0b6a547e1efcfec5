"""Shared utilities for procstatus CLI commands.

This module contains helpers used across the command modules:
- Session state set by the global options (config, log overrides)
- Config loading
- Logging setup from the config plus CLI overrides
- Raw status argument parsing
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from procstatus.core.config import ProcStatusConfig
from procstatus.core.logging import configure_logging, get_logger

_logger = get_logger("cli")

# Exit codes: 0 = success, 1 = the described process failed, 2 = bad input
EXIT_FAILED = 1
EXIT_USAGE = 2


@dataclass
class CliState:
    """Options collected by the global callback.

    All getter/setter functions below delegate to one instance.
    """

    config: ProcStatusConfig = field(default_factory=ProcStatusConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None
    log_format: Literal["json", "console", "both"] | None = None
    log_file: Path | None = None
    logging_configured: bool = False


_state = CliState()


def get_state() -> CliState:
    """Get the current CLI session state."""
    return _state


def reset_state() -> None:
    """Reset session state (primarily for testing)."""
    global _state
    _state = CliState()


def get_config() -> ProcStatusConfig:
    return _state.config


def load_config(path: Path, console: Console) -> ProcStatusConfig:
    """Load a YAML config file into the session state.

    Args:
        path: Config file path.
        console: Rich console for error output.

    Raises:
        typer.Exit: With EXIT_USAGE if the file cannot be read or is invalid.
    """
    try:
        config = ProcStatusConfig.from_yaml(path)
    except OSError as e:
        console.print(f"[red]Cannot read config:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from None
    except (yaml.YAMLError, ValidationError) as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from None
    _state.config = config
    return config


def set_log_level(level: str) -> None:
    """Set the log level override (DEBUG, INFO, WARNING, ERROR)."""
    _state.log_level = level.upper()  # type: ignore[assignment]


def set_log_format(fmt: str) -> None:
    """Set the log format override (json, console, both)."""
    _state.log_format = fmt.lower()  # type: ignore[assignment]


def set_log_file(path: Path | None) -> None:
    """Set the log file path.

    Without an explicit --log-format, a log file switches output to "both":
    the same console-rendered lines on stderr and in the file.
    """
    _state.log_file = path
    if path and _state.log_format is None:
        _state.log_format = "both"


def configure_global_logging(console: Console) -> None:
    """Configure logging from the config file and CLI overrides.

    Only configures once per session. CLI options take precedence over the
    config file.

    Args:
        console: Rich console for error output.

    Raises:
        typer.Exit: If logging configuration fails.
    """
    if _state.logging_configured:
        return

    log = _state.config.log
    try:
        configure_logging(
            level=_state.log_level or log.level,
            format=_state.log_format or log.format,
            file_path=_state.log_file or log.file_path,
            include_timestamps=log.include_timestamps,
        )
    except ValueError as e:
        # format="both" without a log file
        console.print(f"[red]Logging configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from None
    _state.logging_configured = True
    _logger.debug("logging_configured", level=_state.log_level or log.level)


def parse_raw_status(value: str, console: Console) -> int:
    """Parse a status word given on the command line.

    Accepts decimal, ``0x`` hex and ``0o`` octal forms, and ``-1``.

    Raises:
        typer.Exit: With EXIT_USAGE if the value is not an integer.
    """
    try:
        return int(value, 0)
    except ValueError:
        console.print(f"[red]Not an integer status:[/red] {escape(repr(value))}")
        raise typer.Exit(EXIT_USAGE) from None


__all__ = [
    "EXIT_FAILED",
    "EXIT_USAGE",
    "CliState",
    "configure_global_logging",
    "get_config",
    "get_state",
    "load_config",
    "parse_raw_status",
    "reset_state",
    "set_log_file",
    "set_log_format",
    "set_log_level",
]
