"""Configuration models for procstatus.

Configuration is optional and only consulted by applications such as the
``procstatus`` CLI; the library itself works with no configuration at all.

Example ``procstatus.yaml``:

    default_label: build
    signal_table: "ZERO HUP INT QUIT ILL TRAP ABRT BUS FPE KILL USR1 SEGV"
    log:
      level: DEBUG
      format: json
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from procstatus.core.signals import SignalNameResolver, default_resolver


class LogConfig(BaseModel):
    """Configuration for structured logging.

    Controls log level, output format, and the optional log file.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Minimum log level to capture",
    )
    format: Literal["json", "console", "both"] = Field(
        default="console",
        description="Output format: json for structured, console for human-readable, "
        "both for console output to stderr and to file_path",
    )
    file_path: Path | None = Field(
        default=None,
        description="Path for log file output (required if format='both')",
    )
    include_timestamps: bool = Field(
        default=True,
        description="Include ISO8601 UTC timestamps in log entries",
    )

    @model_validator(mode="after")
    def _check_file_path_required(self) -> LogConfig:
        """Validate that file_path is set when format requires file output."""
        if self.format == "both" and self.file_path is None:
            raise ValueError(
                f"file_path is required when format='{self.format}'"
            )
        return self


class ProcStatusConfig(BaseModel):
    """Top-level procstatus configuration."""

    default_label: str = Field(
        default="program",
        min_length=1,
        description="Label used by assert_ok when the caller gives none",
    )
    signal_table: str | None = Field(
        default=None,
        description="Space-separated signal table overriding the host's, "
        "index 0 first (e.g. 'ZERO HUP INT QUIT')",
    )
    log: LogConfig = Field(default_factory=LogConfig)

    @field_validator("signal_table")
    @classmethod
    def _check_signal_table(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("signal_table must not be empty")
        return value

    @classmethod
    def from_yaml(cls, path: Path) -> ProcStatusConfig:
        """Load configuration from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml_string(cls, yaml_str: str) -> ProcStatusConfig:
        """Load configuration from a YAML string."""
        data = yaml.safe_load(yaml_str)
        return cls.model_validate(data or {})

    def build_resolver(self) -> SignalNameResolver:
        """Return a resolver for the configured table, or the host's resolver."""
        if self.signal_table is None:
            return default_resolver()
        table = self.signal_table
        return SignalNameResolver(loader=lambda: table)


__all__ = [
    "LogConfig",
    "ProcStatusConfig",
]
