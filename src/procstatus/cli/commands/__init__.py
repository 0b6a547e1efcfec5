# procstatus/cli/commands: Command modules for the procstatus CLI.
#
# Each module in this package provides one CLI command.

from .check import check
from .describe import describe
from .signals import signals

__all__ = [
    "check",
    "describe",
    "signals",
]
