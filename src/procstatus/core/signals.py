"""Signal number to signal name resolution.

The platform signal table is an ordered, space-separated list of short
signal names indexed by signal number, with a ``ZERO`` placeholder at
index 0:

    ZERO HUP INT QUIT ILL TRAP ABRT BUS FPE KILL USR1 SEGV ...

``SignalNameResolver`` turns that table into ``{1: "SIGHUP", 2: "SIGINT", ...}``
the first time a name is requested and keeps the result for the life of the
process. Numbers missing from the table resolve to ``"signal <N>"``.
"""

from __future__ import annotations

import signal
import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType

from procstatus.core.logging import get_logger

_logger = get_logger("signals")

SignalTableLoader = Callable[[], str]

_EMPTY: Mapping[int, str] = MappingProxyType({})


def parse_signal_table(text: str) -> dict[int, str]:
    """Parse a space-separated signal table into a number-to-name mapping.

    Index 0 is skipped; every other entry gains a ``SIG`` prefix.

    Args:
        text: Table such as ``"ZERO HUP INT QUIT"``.

    Returns:
        Mapping like ``{1: "SIGHUP", 2: "SIGINT", 3: "SIGQUIT"}``.
    """
    names = text.split(" ")
    return {number: f"SIG{names[number]}" for number in range(1, len(names))}


def platform_signal_table() -> str:
    """Render the host's signal table in space-separated form.

    Canonical names come from ``signal.Signals`` (aliases such as SIGIOT or
    SIGCLD are never chosen over SIGABRT and SIGCHLD). Valid numbers without
    a name, like the unnamed real-time signals, are filled as ``NUM<n>``.
    """
    valid = {int(sig) for sig in signal.valid_signals()}
    named: dict[int, str] = {}
    for member in signal.Signals:
        if member.name.startswith("SIG"):
            named.setdefault(int(member), member.name[3:])
            valid.add(int(member))

    highest = max(valid, default=0)
    names = ["ZERO"]
    for number in range(1, highest + 1):
        names.append(named.get(number, f"NUM{number}"))
    return " ".join(names)


class SignalNameResolver:
    """Lazily built, thread-safe signal name lookup.

    The table is built at most once, under a lock, and published as a
    read-only mapping. Readers that arrive during the build wait on the lock
    and then see the finished table.

    Args:
        loader: Returns the space-separated signal table. Defaults to the
            host's table.
    """

    def __init__(self, loader: SignalTableLoader = platform_signal_table) -> None:
        self._loader = loader
        self._names: Mapping[int, str] | None = None
        self._lock = threading.Lock()

    @property
    def is_built(self) -> bool:
        return self._names is not None

    def names(self) -> Mapping[int, str]:
        """Return the read-only number-to-name mapping, building it if needed."""
        names = self._names
        if names is None:
            with self._lock:
                if self._names is None:
                    self._names = self._build()
                names = self._names
        return names

    def _build(self) -> Mapping[int, str]:
        try:
            table = parse_signal_table(self._loader())
        except Exception:
            # Lookups must keep working; every number falls back to "signal <N>".
            _logger.exception("signal_table_load_failed")
            return _EMPTY
        _logger.debug("signal_table_built", count=len(table))
        return MappingProxyType(table)

    def name_of(self, signal_number: int) -> str:
        """Return the name of a signal, e.g. ``11 -> "SIGSEGV"``.

        Args:
            signal_number: Signal number to look up.

        Returns:
            The platform name, or ``"signal <N>"`` if the platform has none.
        """
        name = self.names().get(signal_number)
        if name is None:
            return f"signal {signal_number}"
        return name


_default_resolver = SignalNameResolver()


def default_resolver() -> SignalNameResolver:
    """Return the process-wide resolver backed by the host's signal table."""
    return _default_resolver


def signal_name(signal_number: int) -> str:
    """Get a signal name from the process-wide resolver.

    Args:
        signal_number: The signal number (e.g., signal.SIGTERM).

    Returns:
        Signal name (e.g., "SIGTERM") or "signal N" if unknown.
    """
    return _default_resolver.name_of(signal_number)


__all__ = [
    "SignalNameResolver",
    "SignalTableLoader",
    "default_resolver",
    "parse_signal_table",
    "platform_signal_table",
    "signal_name",
]
