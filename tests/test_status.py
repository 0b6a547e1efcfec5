"""Tests for procstatus.core.status."""

import ctypes
import errno
import subprocess
from dataclasses import FrozenInstanceError

import pytest

from procstatus.core.errors import InvalidStatusError, ProcessFailedError
from procstatus.core.signals import SignalNameResolver
from procstatus.core.source import StatusRecorder
from procstatus.core.status import Exited, FailedToSpawn, ProcessStatus

ENOENT_STRING = 'did not run; status was -1, os error was "No such file or directory" (errno 2)'


def _enoent() -> OSError:
    return OSError(errno.ENOENT, "No such file or directory")


# ============================================================================
# Construction
# ============================================================================


class TestFromRaw:
    """Tests for building statuses from raw words."""

    def test_non_negative_is_exited(self) -> None:
        status = ProcessStatus.from_raw(0)
        assert isinstance(status.outcome, Exited)
        assert status.outcome.raw == 0

    def test_minus_one_is_failed_to_spawn(self) -> None:
        status = ProcessStatus.from_raw(-1, os_error=_enoent())
        assert isinstance(status.outcome, FailedToSpawn)
        assert status.outcome.raw == -1
        assert status.outcome.os_error_message == "No such file or directory"
        assert status.outcome.os_error_number == 2

    @pytest.mark.parametrize("rc", [-2, -9, -256])
    def test_other_negatives_rejected(self, rc: int) -> None:
        with pytest.raises(InvalidStatusError):
            ProcessStatus.from_raw(rc)

    @pytest.mark.parametrize("rc", [True, "0", 1.5, None])
    def test_non_int_rejected(self, rc: object) -> None:
        with pytest.raises(InvalidStatusError):
            ProcessStatus.from_raw(rc)  # type: ignore[arg-type]

    def test_exited_variant_validates(self) -> None:
        with pytest.raises(InvalidStatusError):
            Exited(-1)

    def test_immutable(self) -> None:
        status = ProcessStatus.from_raw(256)
        with pytest.raises(FrozenInstanceError):
            status.outcome = Exited(0)  # type: ignore[misc]

    def test_equality_ignores_resolver(self, linux_resolver: SignalNameResolver) -> None:
        assert ProcessStatus.from_raw(11, resolver=linux_resolver) == ProcessStatus.from_raw(11)


class TestOsErrorCapture:
    """Tests for capturing the OS error behind a -1 status."""

    def test_explicit_error_wins(self) -> None:
        try:
            raise PermissionError(errno.EACCES, "Permission denied")
        except PermissionError:
            status = ProcessStatus.from_raw(-1, os_error=_enoent())
        assert status.as_struct()["os_error_number"] == errno.ENOENT

    def test_handled_exception_captured(self) -> None:
        """Inside an except block the error being handled is used."""
        try:
            raise FileNotFoundError(errno.ENOENT, "No such file or directory")
        except FileNotFoundError:
            status = ProcessStatus.from_raw(-1)
        assert status.as_string() == ENOENT_STRING

    def test_captured_at_construction(self) -> None:
        """Later errno changes do not leak into an existing status."""
        ctypes.set_errno(errno.ENOENT)
        status = ProcessStatus.from_raw(-1)
        ctypes.set_errno(errno.EACCES)
        assert status.as_struct()["os_error_number"] == errno.ENOENT
        assert status.as_string() == status.as_string()
        ctypes.set_errno(0)

    def test_no_error_state(self) -> None:
        ctypes.set_errno(0)
        status = ProcessStatus.from_raw(-1)
        assert status.as_string() == 'did not run; status was -1, os error was "" (errno 0)'

    def test_error_without_errno(self) -> None:
        status = ProcessStatus.from_raw(-1, os_error=OSError("spawn refused"))
        assert status.as_struct() == {
            "status_code": -1,
            "os_error_message": "spawn refused",
            "os_error_number": 0,
        }

    def test_from_spawn_error(self) -> None:
        status = ProcessStatus.from_spawn_error(_enoent())
        assert status.as_string() == ENOENT_STRING


class TestOtherConstructors:
    """Tests for subprocess and source based constructors."""

    def test_from_returncode_exit(self) -> None:
        assert ProcessStatus.from_returncode(92).as_string() == "exited 92"

    def test_from_returncode_signal(self, linux_resolver: SignalNameResolver) -> None:
        status = ProcessStatus.from_returncode(-11, resolver=linux_resolver)
        assert status.as_string() == "exited 0, caught SIGSEGV"

    def test_from_completed(self) -> None:
        completed = subprocess.CompletedProcess(args=["false"], returncode=1)
        status = ProcessStatus.from_completed(completed)
        assert status.exit_status() == 1
        assert not status.is_success()

    def test_current_from_callable(self) -> None:
        status = ProcessStatus.current(lambda: 92 << 8)
        assert status.as_string() == "exited 92"

    def test_current_from_recorder(self) -> None:
        recorder = StatusRecorder()
        recorder.record(0)
        assert ProcessStatus.current(recorder).is_success()

    def test_current_keeps_recorded_spawn_error(self) -> None:
        recorder = StatusRecorder()
        recorder.record_spawn_failure(_enoent())
        assert ProcessStatus.current(recorder).as_string() == ENOENT_STRING

    def test_current_from_plain_source(self) -> None:
        class FixedSource:
            def current_status(self) -> int:
                return 3 << 8

        assert ProcessStatus.current(FixedSource()).exit_status() == 3


# ============================================================================
# Accessors
# ============================================================================


class TestExitedAccessors:
    """Tests for accessors on statuses of children that ran."""

    def test_success(self) -> None:
        status = ProcessStatus.from_raw(0)
        assert status.status_code() == 0
        assert status.is_success() is True
        assert status.exit_status() == 0
        assert status.signal() == 0
        assert status.cored() is False
        assert status.signal_name() is None

    def test_signal_and_core(self, linux_resolver: SignalNameResolver) -> None:
        status = ProcessStatus.from_raw((2 << 8) | 11 | 128, resolver=linux_resolver)
        assert status.status_code() == (2 << 8) | 11 | 128
        assert status.is_success() is False
        assert status.exit_status() == 2
        assert status.signal() == 11
        assert status.cored() is True
        assert status.signal_name() == "SIGSEGV"

    def test_matches_decoder_over_range(self) -> None:
        for rc in range(0, 0x10000, 37):
            status = ProcessStatus.from_raw(rc)
            assert status.exit_status() == rc >> 8
            assert status.signal() == rc & 127
            assert status.cored() == ((rc & 128) != 0)
            assert status.is_success() == (rc == 0)

    def test_idempotent(self, linux_resolver: SignalNameResolver) -> None:
        status = ProcessStatus.from_raw((2 << 8) | 11 | 128, resolver=linux_resolver)
        first = (status.exit_status(), status.signal(), status.cored(), status.as_string())
        second = (status.exit_status(), status.signal(), status.cored(), status.as_string())
        assert first == second
        assert status.as_struct() == status.as_struct()


class TestFailedToSpawnAccessors:
    """Tests for accessors on statuses of children that never ran."""

    def test_accessors(self) -> None:
        status = ProcessStatus.from_raw(-1, os_error=_enoent())
        assert status.status_code() == -1
        assert status.is_success() is False
        assert status.exit_status() == -1
        assert status.signal() == 0
        assert status.cored() is False
        assert status.signal_name() is None


# ============================================================================
# Rendering
# ============================================================================


class TestAsString:
    """Tests for the one-line rendering."""

    def test_exited_zero(self) -> None:
        assert ProcessStatus.from_raw(0).as_string() == "exited 0"

    def test_exited_nonzero(self) -> None:
        assert ProcessStatus.from_raw(92 << 8).as_string() == "exited 92"

    def test_caught_signal(self, linux_resolver: SignalNameResolver) -> None:
        status = ProcessStatus.from_raw((2 << 8) | 11, resolver=linux_resolver)
        assert status.as_string() == "exited 2, caught SIGSEGV"

    def test_caught_signal_dumped_core(self, linux_resolver: SignalNameResolver) -> None:
        status = ProcessStatus.from_raw((2 << 8) | 11 | 128, resolver=linux_resolver)
        assert status.as_string() == "exited 2, caught SIGSEGV; dumped core"

    def test_core_without_signal(self) -> None:
        assert ProcessStatus.from_raw(128).as_string() == "exited 0; dumped core"

    def test_unknown_signal(self, linux_resolver: SignalNameResolver) -> None:
        status = ProcessStatus.from_raw(100, resolver=linux_resolver)
        assert status.as_string() == "exited 0, caught signal 100"

    def test_failed_to_spawn(self) -> None:
        status = ProcessStatus.from_raw(-1, os_error=_enoent())
        assert status.as_string() == ENOENT_STRING

    def test_str(self) -> None:
        assert str(ProcessStatus.from_raw(92 << 8)) == "exited 92"


class TestAsStruct:
    """Tests for the structured rendering."""

    def test_exited_without_signal(self) -> None:
        assert ProcessStatus.from_raw(92 << 8).as_struct() == {
            "status_code": 92 << 8,
            "exit_status": 92,
            "cored": False,
        }

    def test_exited_with_signal(self) -> None:
        struct = ProcessStatus.from_raw((2 << 8) | 11 | 128).as_struct()
        assert struct == {
            "status_code": (2 << 8) | 11 | 128,
            "exit_status": 2,
            "cored": True,
            "signal": 11,
        }

    def test_failed_to_spawn(self) -> None:
        assert ProcessStatus.from_raw(-1, os_error=_enoent()).as_struct() == {
            "status_code": -1,
            "os_error_message": "No such file or directory",
            "os_error_number": 2,
        }


# ============================================================================
# Assertion
# ============================================================================


class TestAssertOk:
    """Tests for escalating failure into an exception."""

    def test_success_is_silent(self) -> None:
        assert ProcessStatus.from_raw(0).assert_ok() is None
        assert ProcessStatus.from_raw(0).assert_ok("make") is None

    def test_default_label(self) -> None:
        with pytest.raises(ProcessFailedError) as exc_info:
            ProcessStatus.from_raw(13 << 8).assert_ok()
        assert str(exc_info.value) == "program exited 13"
        assert exc_info.value.label == "program"

    def test_custom_label(self, linux_resolver: SignalNameResolver) -> None:
        status = ProcessStatus.from_raw((2 << 8) | 11 | 128, resolver=linux_resolver)
        with pytest.raises(ProcessFailedError) as exc_info:
            status.assert_ok("make")
        assert str(exc_info.value) == "make exited 2, caught SIGSEGV; dumped core"
        assert exc_info.value.status is status

    def test_signal_only_fails(self) -> None:
        """A signal with exit status 0 is still a failure."""
        with pytest.raises(ProcessFailedError):
            ProcessStatus.from_raw(9).assert_ok()

    def test_failed_to_spawn_always_fails(self) -> None:
        status = ProcessStatus.from_raw(-1, os_error=_enoent())
        with pytest.raises(ProcessFailedError) as exc_info:
            status.assert_ok("frobnicate")
        assert str(exc_info.value) == f"frobnicate {ENOENT_STRING}"
