"""Error taxonomy for process status handling.

Contains the exception classes raised by procstatus.

This module provides:
- ProcStatusError: Base class for everything procstatus raises
- InvalidStatusError: A raw status word no platform can produce
- ProcessFailedError: Raised by ``ProcessStatus.assert_ok()``
- NoStatusRecordedError: A status source was asked before anything ran

An unsuccessful exit is not an error by itself. Accessors and formatters
report it as data; only ``assert_ok()`` escalates it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from procstatus.core.status import ProcessStatus


class ProcStatusError(Exception):
    """Base class for procstatus errors."""


class InvalidStatusError(ProcStatusError, ValueError):
    """Raised for a raw status that is neither non-negative nor the -1 sentinel.

    Attributes:
        raw: The rejected value.
    """

    def __init__(self, raw: Any, reason: str | None = None) -> None:
        self.raw = raw
        message = f"invalid raw status {raw!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ProcessFailedError(ProcStatusError):
    """Raised when a process status asserted to be successful is not.

    The message is the label followed by the status description, e.g.
    ``"make exited 2, caught SIGSEGV; dumped core"``.

    Attributes:
        label: Name the caller gave the program.
        status: The status that failed the assertion.
    """

    def __init__(self, label: str, status: ProcessStatus) -> None:
        self.label = label
        self.status = status
        super().__init__(f"{label} {status.as_string()}")


class NoStatusRecordedError(ProcStatusError, LookupError):
    """Raised when a status source has no completed child to report."""


__all__ = [
    "InvalidStatusError",
    "NoStatusRecordedError",
    "ProcStatusError",
    "ProcessFailedError",
]
