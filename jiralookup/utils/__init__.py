"""Shared utilities for JIRALOOKUP."""

from jiralookup.utils.errors import ExitCode, JiraLookupError
from jiralookup.utils.logging import get_logger, log_command, log_message, setup_logging

__all__ = [
    "ExitCode",
    "JiraLookupError",
    "get_logger",
    "log_command",
    "log_message",
    "setup_logging",
]
