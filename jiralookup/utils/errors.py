"""Base exception and exit codes for JIRALOOKUP.

Every error raised by this package inherits from JiraLookupError so that
callers can catch the whole family in one place. Each error carries an
exit code used by the command-line front end.
"""

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Process exit codes used by the command-line front end."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIGURATION_ERROR = 2
    BACKEND_UNAVAILABLE = 3
    TICKET_NOT_FOUND = 4
    ACCESS_DENIED = 5
    RATE_LIMITED = 6


class JiraLookupError(Exception):
    """Base exception for JIRALOOKUP errors.

    Subclasses override _default_exit_code; a per-instance exit code
    can still be passed explicitly.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Get the exit code for this exception."""
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


__all__ = [
    "ExitCode",
    "JiraLookupError",
]
