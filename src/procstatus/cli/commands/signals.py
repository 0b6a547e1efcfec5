"""Signals command for the procstatus CLI."""

from __future__ import annotations

import typer

from ..helpers import configure_global_logging, get_config
from ..output import console, create_signal_table


def signals(
    number: int | None = typer.Argument(
        None,
        help="Only print the name of this signal number",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Print the table as JSON",
    ),
) -> None:
    """List the signal names used when describing statuses."""
    configure_global_logging(console)
    resolver = get_config().build_resolver()

    if number is not None:
        console.print(resolver.name_of(number), markup=False, highlight=False, soft_wrap=True)
        return

    names = resolver.names()
    if json_output:
        console.print_json(data={str(k): v for k, v in sorted(names.items())})
    else:
        console.print(create_signal_table(names))
