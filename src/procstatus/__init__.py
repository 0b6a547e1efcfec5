"""procstatus - a handle on process termination status words."""

__version__ = "0.3.0"

from procstatus.core.errors import (
    InvalidStatusError,
    NoStatusRecordedError,
    ProcessFailedError,
    ProcStatusError,
)
from procstatus.core.signals import SignalNameResolver, signal_name
from procstatus.core.source import StatusRecorder, StatusSource
from procstatus.core.status import Exited, FailedToSpawn, ProcessStatus

__all__ = [
    "__version__",
    "Exited",
    "FailedToSpawn",
    "InvalidStatusError",
    "NoStatusRecordedError",
    "ProcStatusError",
    "ProcessFailedError",
    "ProcessStatus",
    "SignalNameResolver",
    "StatusRecorder",
    "StatusSource",
    "signal_name",
]
