"""Bit-level decoding of raw process status words.

A non-negative status word, as reported by ``wait(2)``, packs three fields:

    | Bits  | Field                                   |
    |-------|-----------------------------------------|
    | 8-15+ | exit status                             |
    | 7     | core dump flag                          |
    | 0-6   | terminating signal number (0 = none)    |

The value -1 is reserved for "the process never ran" and carries none of
these fields, so every decoder here rejects negative input. Callers route
-1 to ``ProcessStatus.from_raw()`` instead.
"""

from __future__ import annotations

from typing import Any

from procstatus.core.errors import InvalidStatusError

SPAWN_FAILED = -1
EXIT_SHIFT = 8
SIGNAL_MASK = 0x7F
CORE_FLAG = 0x80

MAX_EXIT_STATUS = 0xFF


def check_raw(rc: Any) -> int:
    """Validate a raw status word for decoding.

    Args:
        rc: Candidate status word.

    Returns:
        ``rc`` unchanged.

    Raises:
        InvalidStatusError: If ``rc`` is not an int, is a bool, or is negative.
    """
    # bool is an int subclass; True would silently decode as "caught signal 1"
    if isinstance(rc, bool) or not isinstance(rc, int):
        raise InvalidStatusError(rc, "status must be an integer")
    if rc < 0:
        raise InvalidStatusError(rc, "negative status words cannot be decoded")
    return rc


def exit_status(rc: int) -> int:
    """Return the exit status held in the high bits."""
    return check_raw(rc) >> EXIT_SHIFT


def signal_number(rc: int) -> int:
    """Return the terminating signal number, or 0 for a normal exit."""
    return check_raw(rc) & SIGNAL_MASK


def core_dumped(rc: int) -> bool:
    """Return True if the core dump flag is set."""
    return (check_raw(rc) & CORE_FLAG) != 0


def is_success(rc: int) -> bool:
    return check_raw(rc) == 0


def encode(exit_status: int = 0, signal: int = 0, cored: bool = False) -> int:
    """Build a raw status word from its parts.

    Args:
        exit_status: Exit status, 0-255.
        signal: Terminating signal number, 0-127.
        cored: Whether the core dump flag is set.

    Returns:
        The packed status word.

    Raises:
        InvalidStatusError: If a field is out of range.
    """
    if not 0 <= exit_status <= MAX_EXIT_STATUS:
        raise InvalidStatusError(exit_status, "exit status must be within 0-255")
    if not 0 <= signal <= SIGNAL_MASK:
        raise InvalidStatusError(signal, "signal number must be within 0-127")
    rc = (exit_status << EXIT_SHIFT) | signal
    if cored:
        rc |= CORE_FLAG
    return rc


def from_returncode(code: int) -> int:
    """Convert a ``subprocess`` return code into a raw status word.

    ``Popen.returncode`` is ``-N`` when the child was killed by signal N
    and the plain exit status otherwise.

    Args:
        code: Return code from ``subprocess.Popen`` or ``CompletedProcess``.

    Returns:
        The equivalent status word.
    """
    if isinstance(code, bool) or not isinstance(code, int):
        raise InvalidStatusError(code, "return code must be an integer")
    if code < 0:
        return encode(signal=-code)
    return encode(exit_status=code)


__all__ = [
    "CORE_FLAG",
    "EXIT_SHIFT",
    "MAX_EXIT_STATUS",
    "SIGNAL_MASK",
    "SPAWN_FAILED",
    "check_raw",
    "core_dumped",
    "encode",
    "exit_status",
    "from_returncode",
    "is_success",
    "signal_number",
]
