"""Rich output formatting for the procstatus CLI.

This module centralizes the Rich-based rendering used by the commands:
- The shared console instance
- Color choice for a status
- Table builders with consistent styling
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rich.console import Console
from rich.table import Table

from procstatus.core.status import ProcessStatus

# =============================================================================
# Shared console instance
# =============================================================================

# NOTE: --json output goes through console.print_json so it stays parseable;
# nothing else is printed in that mode.
console = Console()

# Failure output from `check`
err_console = Console(stderr=True)


# =============================================================================
# Colors
# =============================================================================


class StatusColors:
    """Color mappings for status outcomes."""

    SUCCESS = "green"
    FAILED = "red"
    NOT_RUN = "magenta"

    @classmethod
    def for_status(cls, status: ProcessStatus) -> str:
        """Get the color for a process status."""
        if status.is_success():
            return cls.SUCCESS
        if status.status_code() == -1:
            return cls.NOT_RUN
        return cls.FAILED


# =============================================================================
# Tables
# =============================================================================


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def create_status_table(status: ProcessStatus) -> Table:
    """Build a two-column field/value table for a status.

    Args:
        status: Status to describe.

    Returns:
        Table with one row per ``as_struct()`` field, plus the signal name.
    """
    color = StatusColors.for_status(status)
    table = Table(
        title=f"[{color}]{status.as_string()}[/{color}]",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    for key, value in status.as_struct().items():
        table.add_row(key, _format_value(value))

    name = status.signal_name()
    if name is not None:
        table.add_row("signal_name", name)
    return table


def create_signal_table(names: Mapping[int, str]) -> Table:
    """Build a number/name table for a signal mapping."""
    table = Table(title="Signals", show_header=True, header_style="bold")
    table.add_column("Number", justify="right", style="cyan")
    table.add_column("Name")
    for number in sorted(names):
        table.add_row(str(number), names[number])
    return table


__all__ = [
    "StatusColors",
    "console",
    "err_console",
    "create_signal_table",
    "create_status_table",
]
