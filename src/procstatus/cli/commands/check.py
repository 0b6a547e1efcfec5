"""Check command for the procstatus CLI.

Implements ``procstatus check``, the command-line form of
``ProcessStatus.assert_ok()``: silent on success, prints the failure
message and exits 1 otherwise.
"""

from __future__ import annotations

import typer

from procstatus.core.errors import ProcessFailedError

from ..helpers import EXIT_FAILED, configure_global_logging, get_config
from ..output import console, err_console
from .describe import build_status


def check(
    status: str = typer.Argument(
        ...,
        help="Raw status word (decimal, 0x hex or 0o octal). Use '--' before -1.",
    ),
    label: str | None = typer.Option(
        None,
        "--label",
        "-l",
        help="Program name for the failure message (default from config)",
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
    """Exit 0 if the status is a success, print why to stderr and exit 1 otherwise.

    Exit codes:
      0: Success
      1: The process failed, was killed, or did not run
      2: STATUS is not a valid status word
    """
    configure_global_logging(console)
    process_status = build_status(status, returncode=returncode, errno=errno)

    try:
        process_status.assert_ok(label or get_config().default_label)
    except ProcessFailedError as e:
        err_console.print(str(e), markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(EXIT_FAILED) from None
