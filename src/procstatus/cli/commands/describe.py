"""Describe command for the procstatus CLI.

Implements ``procstatus describe``, which decodes a status word and prints
its string or structured rendering.
"""

from __future__ import annotations

import os

import typer
from rich.markup import escape

from procstatus.core.decoder import SPAWN_FAILED
from procstatus.core.errors import InvalidStatusError
from procstatus.core.status import ProcessStatus

from ..helpers import (
    EXIT_USAGE,
    configure_global_logging,
    get_config,
    parse_raw_status,
)
from ..output import console, create_status_table


def build_status(
    value: str,
    returncode: bool = False,
    errno: int | None = None,
) -> ProcessStatus:
    """Build a status from a command-line value.

    Args:
        value: Raw status word, or a subprocess return code with ``returncode``.
        returncode: Interpret ``value`` as ``Popen.returncode``.
        errno: OS error number to attach when ``value`` is -1.
            Rejected for any other value and with ``returncode``.

    Raises:
        typer.Exit: With EXIT_USAGE for values no platform can produce.
    """
    number = parse_raw_status(value, console)
    if errno is not None and (returncode or number != SPAWN_FAILED):
        console.print("[red]--errno only applies to a raw status of -1[/red]")
        raise typer.Exit(EXIT_USAGE)
    resolver = get_config().build_resolver()
    try:
        if returncode:
            return ProcessStatus.from_returncode(number, resolver=resolver)
        os_error = OSError(errno, os.strerror(errno)) if errno else None
        return ProcessStatus.from_raw(number, os_error=os_error, resolver=resolver)
    except InvalidStatusError as e:
        console.print(f"[red]Invalid status:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE) from None


def describe(
    status: str = typer.Argument(
        ...,
        help="Raw status word (decimal, 0x hex or 0o octal). Use '--' before -1.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the structured rendering as JSON",
    ),
    table: bool = typer.Option(
        False,
        "--table",
        "-t",
        help="Print a field table instead of a single line",
    ),
    returncode: bool = typer.Option(
        False,
        "--returncode",
        "-r",
        help="Treat STATUS as a subprocess return code (negative = signal)",
    ),
    errno: int | None = typer.Option(
        None,
        "--errno",
        help="OS error number to report when STATUS is -1 (rejected otherwise)",
    ),
) -> None:
    """Decode a process status word.

    Examples:
      procstatus describe 0            -> exited 0
      procstatus describe 0x28b        -> exited 2, caught SIGSEGV; dumped core
      procstatus describe --errno 2 -- -1
    """
    configure_global_logging(console)
    process_status = build_status(status, returncode=returncode, errno=errno)

    if json_output:
        console.print_json(data=process_status.as_struct())
    elif table:
        console.print(create_status_table(process_status))
    else:
        console.print(
            process_status.as_string(), markup=False, highlight=False, soft_wrap=True
        )
