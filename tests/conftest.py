"""Pytest fixtures for procstatus tests."""

import logging
from typing import Generator

import pytest
import structlog

from procstatus.core.signals import SignalNameResolver

# Linux numbering for the first twelve signals
LINUX_TABLE = "ZERO HUP INT QUIT ILL TRAP ABRT BUS FPE KILL USR1 SEGV"


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset logging and CLI session state before and after each test.

    This ensures test isolation for logging configuration.
    """
    from procstatus.cli import helpers

    helpers.reset_state()
    structlog.reset_defaults()

    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield

    helpers.reset_state()
    structlog.reset_defaults()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def linux_resolver() -> SignalNameResolver:
    """Resolver over a fixed table, independent of the host platform."""
    return SignalNameResolver(loader=lambda: LINUX_TABLE)
