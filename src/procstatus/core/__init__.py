"""Core decoding, signal lookup and status value types."""

from procstatus.core.config import LogConfig, ProcStatusConfig
from procstatus.core.errors import (
    InvalidStatusError,
    NoStatusRecordedError,
    ProcessFailedError,
    ProcStatusError,
)
from procstatus.core.signals import SignalNameResolver, default_resolver, signal_name
from procstatus.core.source import SnapshotSource, StatusRecorder, StatusSource
from procstatus.core.status import DEFAULT_LABEL, Exited, FailedToSpawn, ProcessStatus

__all__ = [
    "DEFAULT_LABEL",
    "Exited",
    "FailedToSpawn",
    "InvalidStatusError",
    "LogConfig",
    "NoStatusRecordedError",
    "ProcStatusConfig",
    "ProcStatusError",
    "ProcessFailedError",
    "ProcessStatus",
    "SignalNameResolver",
    "SnapshotSource",
    "StatusRecorder",
    "StatusSource",
    "default_resolver",
    "signal_name",
]
