"""Structured logging infrastructure for procstatus.

Provides structured logging using structlog on top of the stdlib ``logging``
module. Library modules only emit DEBUG events; applications (including the
``procstatus`` CLI) decide where they go by calling ``configure_logging()``.

Example usage:
    from procstatus.core.logging import configure_logging, get_logger

    # Configure once at startup
    configure_logging(level="DEBUG", format="console")

    # Get a component-specific logger
    logger = get_logger("status")

    # Log with auto-context
    logger.debug("spawn_failure_captured", errno=2)

    # Bind context for a scope
    ctx_logger = logger.bind(label="make")
    ctx_logger.debug("assert_failed")
"""

from __future__ import annotations

import logging
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

LIBRARY_LOGGER_NAME = "procstatus"

# Applications that never configure logging hear nothing from procstatus.
logging.getLogger(LIBRARY_LOGGER_NAME).addHandler(logging.NullHandler())

# Used until configure_logging() (or the application) configures structlog:
# events go through the stdlib "procstatus" logger and its levels.
_UNCONFIGURED_PROCESSORS: list[Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_log_level,
    structlog.processors.format_exc_info,
    structlog.processors.KeyValueRenderer(key_order=["event"]),
]


def _add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds an ISO8601 UTC timestamp."""
    event_dict["timestamp"] = datetime.now(UTC).isoformat()
    return event_dict


class StatusLogger:
    """Component logger wrapper around structlog.

    The underlying structlog logger is fetched on every call so that loggers
    created at import time still honour a later ``configure_logging()``.
    While structlog is unconfigured, events are routed to the stdlib logger
    ``procstatus.<component>`` so its level (WARNING by default) applies.
    """

    def __init__(self, component: str, **initial_context: Any) -> None:
        self._component = component
        self._context: dict[str, Any] = {"component": component, **initial_context}

    def _get_logger(self) -> structlog.stdlib.BoundLogger:
        if not structlog.is_configured():
            stdlib_logger = logging.getLogger(f"{LIBRARY_LOGGER_NAME}.{self._component}")
            fallback: structlog.stdlib.BoundLogger = structlog.wrap_logger(
                stdlib_logger,
                processors=_UNCONFIGURED_PROCESSORS,
                wrapper_class=structlog.stdlib.BoundLogger,
                context_class=dict,
            ).bind(**self._context)
            return fallback
        logger: structlog.stdlib.BoundLogger = structlog.get_logger().bind(**self._context)
        return logger

    @property
    def component(self) -> str:
        return self._component

    def bind(self, **context: Any) -> StatusLogger:
        """Create a new logger with additional bound context.

        Args:
            **context: Additional context to bind (e.g., label, raw).

        Returns:
            A new StatusLogger with the additional context bound.
        """
        new_logger = StatusLogger.__new__(StatusLogger)
        new_logger._component = self._component
        new_logger._context = {**self._context, **context}
        return new_logger

    def debug(self, event: str, **kw: Any) -> None:
        self._get_logger().debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._get_logger().info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._get_logger().warning(event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._get_logger().error(event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        """Log an exception with traceback.

        Should be called from within an exception handler.
        """
        self._get_logger().exception(event, **kw)


def _get_processors(
    format: Literal["json", "console", "both"],  # noqa: A002
    include_timestamps: bool,
) -> list[Processor]:
    """Get the structlog processor chain for an output format.

    Args:
        format: "json" renders JSON lines; anything else renders for a console.
        include_timestamps: Whether to add timestamps to log entries.

    Returns:
        List of processors ending in a renderer.
    """
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
    ]

    if include_timestamps:
        processors.append(_add_timestamp)

    processors.extend([
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ])

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    return processors


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO",
    format: Literal["json", "console", "both"] = "console",  # noqa: A002
    file_path: Path | None = None,
    max_file_size_mb: int = 10,
    backup_count: int = 3,
    include_timestamps: bool = True,
) -> None:
    """Configure procstatus structured logging.

    Call once at application startup. Library code never calls this.

    Args:
        level: Minimum log level to capture.
        format: "json" for structured, "console" for human-readable,
            "both" for console output to stderr and to file_path.
        file_path: Optional file path for log output. Required if format="both".
        max_file_size_mb: Maximum log file size before rotation (MB).
        backup_count: Number of rotated log files to keep.
        include_timestamps: Whether to include ISO8601 timestamps in log entries.

    Raises:
        ValueError: If format="both" but file_path is not provided.
    """
    if format == "both" and file_path is None:
        raise ValueError("file_path is required when format='both'")

    log_level = getattr(logging, level)
    handlers: list[logging.Handler] = []

    if format in ("console", "both"):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        handlers.append(console_handler)

    if format in ("json", "both"):
        if file_path is not None:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                file_path,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            handlers.append(file_handler)
        else:
            json_handler = logging.StreamHandler(sys.stderr)
            json_handler.setLevel(log_level)
            handlers.append(json_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)

    # NOTE: cache_logger_on_first_use=False so module-level loggers pick up
    # configuration applied after import.
    structlog.configure(
        processors=_get_processors(format, include_timestamps),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str, **initial_context: Any) -> StatusLogger:
    """Get a procstatus logger for a component.

    Args:
        component: The component name (e.g., "signals", "status", "cli").
        **initial_context: Additional context to bind.

    Returns:
        A StatusLogger bound to the component.
    """
    return StatusLogger(component, **initial_context)


__all__ = [
    "LIBRARY_LOGGER_NAME",
    "StatusLogger",
    "configure_logging",
    "get_logger",
]
