"""Status sources: where "the last completed child" comes from.

procstatus never spawns or waits on processes. A spawning facility reports
what happened to a ``StatusSource`` and ``ProcessStatus.current(source)``
reads it back. ``StatusRecorder`` is a ready-made source to hand around
explicitly instead of keeping a hidden global "last status".
"""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from procstatus.core.decoder import SPAWN_FAILED, check_raw, from_returncode
from procstatus.core.errors import NoStatusRecordedError


@runtime_checkable
class StatusSource(Protocol):
    """Anything that can report the raw status of the last completed child."""

    def current_status(self) -> int:
        """Return the raw status word, or -1 if the child never ran."""
        ...


@runtime_checkable
class SnapshotSource(Protocol):
    """A status source that reports the status and its spawn error together."""

    def snapshot(self) -> tuple[int, OSError | None]:
        """Return the raw status and, for -1, the error recorded with it."""
        ...


class StatusRecorder:
    """Thread-safe holder for the most recent child status.

    Example:
        recorder = StatusRecorder()
        try:
            proc = subprocess.run(argv)
        except OSError as exc:
            recorder.record_spawn_failure(exc)
        else:
            recorder.record_returncode(proc.returncode)
        ProcessStatus.current(recorder).assert_ok(argv[0])
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._raw: int | None = None
        self._error: OSError | None = None

    def record(self, rc: int) -> None:
        """Record a raw status word from ``os.wait()`` and friends.

        Raises:
            InvalidStatusError: If ``rc`` is negative; use
                ``record_spawn_failure()`` for the -1 case.
        """
        check_raw(rc)
        with self._lock:
            self._raw = rc
            self._error = None

    def record_returncode(self, code: int) -> None:
        """Record a ``subprocess`` return code (negative means killed by signal)."""
        rc = from_returncode(code)
        with self._lock:
            self._raw = rc
            self._error = None

    def record_spawn_failure(self, error: OSError) -> None:
        """Record that the child never ran, keeping the error that said so."""
        with self._lock:
            self._raw = SPAWN_FAILED
            self._error = error

    def current_status(self) -> int:
        with self._lock:
            if self._raw is None:
                raise NoStatusRecordedError("no child process status has been recorded")
            return self._raw

    def spawn_error(self) -> OSError | None:
        with self._lock:
            return self._error

    def snapshot(self) -> tuple[int, OSError | None]:
        with self._lock:
            if self._raw is None:
                raise NoStatusRecordedError("no child process status has been recorded")
            return self._raw, self._error


__all__ = [
    "SnapshotSource",
    "StatusRecorder",
    "StatusSource",
]
