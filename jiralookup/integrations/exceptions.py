"""Exceptions raised while fetching ticket metadata.

Hierarchy:
- TicketFetchError: Base exception for all fetch failures
  - ConfigurationError: Invalid client configuration (raised before any I/O)
  - UnavailableError: Backend cannot be invoked (CLI missing, API unconfigured)
  - HttpStatusError: Base for non-200 API responses
    - AuthenticationError: HTTP 401
    - TicketPermissionError: HTTP 403
    - TicketNotFoundError: HTTP 404
    - ServerError: HTTP 5xx or any other unmapped status
  - RateLimitExhaustedError: HTTP 429 persisted through every retry
  - TransportError: The HTTP request could not be performed
  - CommandFailedError: The CLI executable failed
  - ParseError: Response or output could not be decoded

None of these are fatal: callers that only use ticket metadata for
enrichment can catch TicketFetchError and continue without it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar

from jiralookup.utils.errors import ExitCode, JiraLookupError


class TicketFetchError(JiraLookupError):
    """Base exception for ticket fetch failures.

    Attributes:
        ticket_id: The ticket being fetched, when known
    """

    def __init__(self, message: str, ticket_id: str | None = None) -> None:
        super().__init__(message)
        self.ticket_id = ticket_id


class ConfigurationError(TicketFetchError):
    """Raised when a client cannot be built from its configuration.

    Covers missing API fields, a CLI executable name that fails the
    allowlist, and an unknown client mode.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.CONFIGURATION_ERROR


class UnavailableError(TicketFetchError):
    """Raised when the configured backend cannot be invoked."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.BACKEND_UNAVAILABLE


class HttpStatusError(TicketFetchError):
    """Raised for a non-200 response from the Jira REST API.

    Attributes:
        status_code: HTTP status code of the response
        error_messages: Messages from the "errorMessages" array of the body
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        ticket_id: str | None = None,
        error_messages: Sequence[str] = (),
    ) -> None:
        self.status_code = status_code
        self.error_messages = list(error_messages)
        if self.error_messages:
            message = f"{message}: {'; '.join(self.error_messages)}"
        super().__init__(message, ticket_id=ticket_id)


class AuthenticationError(HttpStatusError):
    """Credentials were rejected (HTTP 401)."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.CONFIGURATION_ERROR


class TicketPermissionError(HttpStatusError):
    """Authenticated, but not allowed to view the ticket (HTTP 403)."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.ACCESS_DENIED


class TicketNotFoundError(HttpStatusError):
    """The ticket does not exist (HTTP 404)."""

    _default_exit_code: ClassVar[ExitCode] = ExitCode.TICKET_NOT_FOUND


class ServerError(HttpStatusError):
    """HTTP 5xx, or any 4xx status without a dedicated error class."""


class RateLimitExhaustedError(TicketFetchError):
    """HTTP 429 was returned on every attempt.

    Attributes:
        attempts: Number of retries made after the first request
        total_wait_time: Seconds spent sleeping between attempts
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.RATE_LIMITED

    def __init__(
        self,
        attempts: int,
        total_wait_time: float,
        ticket_id: str | None = None,
        message: str | None = None,
    ) -> None:
        self.attempts = attempts
        self.total_wait_time = total_wait_time
        if message is None:
            message = (
                f"rate limited after {attempts} retries "
                f"(total wait: {total_wait_time:.1f}s)"
            )
        super().__init__(message, ticket_id=ticket_id)


class TransportError(TicketFetchError):
    """The HTTP request failed before a response was received.

    Attributes:
        original_error: The underlying httpx error
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.BACKEND_UNAVAILABLE

    def __init__(
        self,
        message: str,
        ticket_id: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.original_error = original_error
        super().__init__(message, ticket_id=ticket_id)


class CommandFailedError(TicketFetchError):
    """The tracker CLI exited with a non-zero status or timed out.

    Attributes:
        returncode: Process exit status (None on timeout)
        stderr: Truncated standard error output
    """

    def __init__(
        self,
        message: str,
        ticket_id: str | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message, ticket_id=ticket_id)


class ParseError(TicketFetchError):
    """A response body or CLI output could not be decoded.

    Attributes:
        raw_response: The payload that failed to decode, if available
        original_error: The underlying decode error, if available
    """

    def __init__(
        self,
        message: str,
        ticket_id: str | None = None,
        raw_response: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.raw_response = raw_response
        self.original_error = original_error
        super().__init__(message, ticket_id=ticket_id)


__all__ = [
    "TicketFetchError",
    "ConfigurationError",
    "UnavailableError",
    "HttpStatusError",
    "AuthenticationError",
    "TicketPermissionError",
    "TicketNotFoundError",
    "ServerError",
    "RateLimitExhaustedError",
    "TransportError",
    "CommandFailedError",
    "ParseError",
]
