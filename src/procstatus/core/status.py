"""A handle on process termination, decoded from a raw status word.

When a child process finishes, the platform reports a single integer. The
``ProcessStatus`` value type decomposes it into an exit status, a signal and
a core dump flag, renders it for humans, and can turn an unsuccessful result
into an exception:

    status = ProcessStatus.from_raw(os.waitpid(pid, 0)[1])
    status.as_string()      # "exited 2, caught SIGSEGV; dumped core"
    status.assert_ok("make")

A status is one of two variants:

- ``Exited``: the child ran; ``raw`` is a non-negative status word.
- ``FailedToSpawn``: the child never ran (``raw`` is -1). The OS error that
  explains why is copied in when the value is built, because errno is
  process-global and the next system call may overwrite it.

Values are immutable, so every accessor is a pure read and safe to call
from any thread.
"""

from __future__ import annotations

import ctypes
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, assert_never

from procstatus.core import decoder
from procstatus.core.errors import InvalidStatusError, ProcessFailedError
from procstatus.core.logging import get_logger
from procstatus.core.signals import SignalNameResolver, default_resolver
from procstatus.core.source import SnapshotSource, StatusSource

if TYPE_CHECKING:
    import subprocess

_logger = get_logger("status")

DEFAULT_LABEL = "program"


@dataclass(frozen=True)
class Exited:
    """The child ran and terminated; ``raw`` is its status word."""

    raw: int

    def __post_init__(self) -> None:
        decoder.check_raw(self.raw)


@dataclass(frozen=True)
class FailedToSpawn:
    """The child never ran.

    Attributes:
        os_error_message: OS error text at the time of failure.
        os_error_number: errno at the time of failure (0 if none was set).
        raw: Always -1.
    """

    os_error_message: str
    os_error_number: int
    raw: int = field(default=decoder.SPAWN_FAILED, init=False)


Outcome = Exited | FailedToSpawn


def _capture_os_error(os_error: OSError | None) -> tuple[str, int]:
    """Read the OS error behind a spawn failure, right now.

    Precedence: the error passed in, then an ``OSError`` currently being
    handled, then the C-level errno kept by ctypes.
    """
    if os_error is None:
        handled = sys.exc_info()[1]
        if isinstance(handled, OSError):
            os_error = handled

    if os_error is not None:
        number = os_error.errno or 0
        message = os_error.strerror
        if not message:
            message = os.strerror(number) if number else str(os_error)
        return message, number

    number = ctypes.get_errno()
    return (os.strerror(number) if number else ""), number


@dataclass(frozen=True)
class ProcessStatus:
    """Decoded termination status of a child process.

    Build one with ``from_raw()`` (or one of the other ``from_*``
    constructors), not by calling the class directly.

    Attributes:
        outcome: The ``Exited`` or ``FailedToSpawn`` variant.
        resolver: Signal name lookup used by ``as_string()``.
    """

    outcome: Outcome
    resolver: SignalNameResolver = field(
        default_factory=default_resolver, compare=False, repr=False
    )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_raw(
        cls,
        rc: int,
        os_error: OSError | None = None,
        resolver: SignalNameResolver | None = None,
    ) -> ProcessStatus:
        """Build a status from a raw status word.

        For ``rc == -1`` the OS error message and number are captured in
        this call, from ``os_error`` if given, otherwise from the current
        OS error state.

        Args:
            rc: Raw status word, or -1 if the child never ran.
            os_error: The error that stopped the child from running.
            resolver: Signal name lookup; defaults to the host's table.

        Returns:
            The decoded status.

        Raises:
            InvalidStatusError: If ``rc`` is not an int or is negative but not -1.
        """
        if isinstance(rc, bool) or not isinstance(rc, int):
            raise InvalidStatusError(rc, "status must be an integer")
        resolver = resolver or default_resolver()

        if rc == decoder.SPAWN_FAILED:
            message, number = _capture_os_error(os_error)
            _logger.debug("spawn_failure_captured", os_error_number=number)
            return cls(FailedToSpawn(message, number), resolver)
        if rc < 0:
            raise InvalidStatusError(rc, "only -1 may be negative")
        return cls(Exited(rc), resolver)

    @classmethod
    def from_returncode(
        cls, code: int, resolver: SignalNameResolver | None = None
    ) -> ProcessStatus:
        """Build a status from a ``subprocess`` return code.

        ``-N`` means the child was killed by signal N.
        """
        return cls.from_raw(decoder.from_returncode(code), resolver=resolver)

    @classmethod
    def from_completed(
        cls,
        completed: subprocess.CompletedProcess[Any],
        resolver: SignalNameResolver | None = None,
    ) -> ProcessStatus:
        """Build a status from the result of ``subprocess.run()``."""
        return cls.from_returncode(completed.returncode, resolver=resolver)

    @classmethod
    def from_spawn_error(
        cls, error: OSError, resolver: SignalNameResolver | None = None
    ) -> ProcessStatus:
        """Build a ``FailedToSpawn`` status from the error a spawn call raised."""
        return cls.from_raw(decoder.SPAWN_FAILED, os_error=error, resolver=resolver)

    @classmethod
    def current(
        cls,
        source: StatusSource | Callable[[], int],
        resolver: SignalNameResolver | None = None,
    ) -> ProcessStatus:
        """Build a status for the last child reported by ``source``.

        Args:
            source: A ``StatusSource`` or a zero-argument callable returning
                the raw status word.
            resolver: Signal name lookup; defaults to the host's table.

        Raises:
            NoStatusRecordedError: If the source has nothing recorded yet.
        """
        os_error: OSError | None = None
        if isinstance(source, SnapshotSource):
            rc, os_error = source.snapshot()
        elif isinstance(source, StatusSource):
            rc = source.current_status()
        else:
            rc = source()
        return cls.from_raw(rc, os_error=os_error, resolver=resolver)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def status_code(self) -> int:
        """Return the raw status word (-1 if the child never ran)."""
        outcome = self.outcome
        if isinstance(outcome, Exited):
            return outcome.raw
        if isinstance(outcome, FailedToSpawn):
            return outcome.raw
        assert_never(outcome)

    def is_success(self) -> bool:
        """Return True if the child ran and its status word is zero."""
        outcome = self.outcome
        if isinstance(outcome, Exited):
            return decoder.is_success(outcome.raw)
        if isinstance(outcome, FailedToSpawn):
            return False
        assert_never(outcome)

    def exit_status(self) -> int:
        """Return the exit status in the top bits.

        A child that never ran has no exit status; -1 is returned instead.
        """
        outcome = self.outcome
        if isinstance(outcome, Exited):
            return decoder.exit_status(outcome.raw)
        if isinstance(outcome, FailedToSpawn):
            return outcome.raw
        assert_never(outcome)

    def signal(self) -> int:
        """Return the signal the child caught, or zero."""
        outcome = self.outcome
        if isinstance(outcome, Exited):
            return decoder.signal_number(outcome.raw)
        if isinstance(outcome, FailedToSpawn):
            return 0
        assert_never(outcome)

    def cored(self) -> bool:
        """Return True if the child dumped core."""
        outcome = self.outcome
        if isinstance(outcome, Exited):
            return decoder.core_dumped(outcome.raw)
        if isinstance(outcome, FailedToSpawn):
            return False
        assert_never(outcome)

    def signal_name(self) -> str | None:
        """Return the name of the caught signal, or None."""
        number = self.signal()
        if not number:
            return None
        return self.resolver.name_of(number)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def as_struct(self) -> dict[str, Any]:
        """Return a dict describing the status.

        Its exact contents may change over time; it is meant for human,
        not computer, consumption.
        """
        outcome = self.outcome
        if isinstance(outcome, Exited):
            struct: dict[str, Any] = {
                "status_code": outcome.raw,
                "exit_status": decoder.exit_status(outcome.raw),
                "cored": decoder.core_dumped(outcome.raw),
            }
            number = decoder.signal_number(outcome.raw)
            if number:
                struct["signal"] = number
            return struct
        if isinstance(outcome, FailedToSpawn):
            return {
                "status_code": outcome.raw,
                "os_error_message": outcome.os_error_message,
                "os_error_number": outcome.os_error_number,
            }
        assert_never(outcome)

    def as_string(self) -> str:
        """Return a one-line description of the status.

        Roughly, you might get things like this:

            exited 0
            exited 92
            exited 2, caught SIGTERM
            exited 2, caught SIGSEGV; dumped core
            did not run; status was -1, os error was "No such file or directory" (errno 2)
        """
        outcome = self.outcome
        if isinstance(outcome, Exited):
            text = f"exited {decoder.exit_status(outcome.raw)}"
            number = decoder.signal_number(outcome.raw)
            if number:
                text += f", caught {self.resolver.name_of(number)}"
            if decoder.core_dumped(outcome.raw):
                text += "; dumped core"
            return text
        if isinstance(outcome, FailedToSpawn):
            return (
                f"did not run; status was {outcome.raw}, "
                f'os error was "{outcome.os_error_message}" '
                f"(errno {outcome.os_error_number})"
            )
        assert_never(outcome)

    def __str__(self) -> str:
        return self.as_string()

    # ------------------------------------------------------------------
    # Assertion
    # ------------------------------------------------------------------

    def assert_ok(self, label: str = DEFAULT_LABEL) -> None:
        """Do nothing if the child succeeded; raise otherwise.

        Args:
            label: Program name to lead the error message with.

        Raises:
            ProcessFailedError: With a message like
                ``"your-program exited 13, caught SIGPIPE"``.
        """
        if self.is_success():
            return
        _logger.debug(
            "process_status_assert_failed",
            label=label,
            status_code=self.status_code(),
        )
        raise ProcessFailedError(label, self)


__all__ = [
    "DEFAULT_LABEL",
    "Exited",
    "FailedToSpawn",
    "Outcome",
    "ProcessStatus",
]
