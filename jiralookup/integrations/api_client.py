"""Jira client backed by the Jira Cloud REST API v3.

API endpoint: GET {base_url}/rest/api/3/issue/{issueIdOrKey}

Requests use HTTP Basic authentication (email + API token) and are
retried on HTTP 429 according to the configured RetryConfig.

Resource Management:
    The client owns an httpx.Client unless one is injected. Use it as a
    context manager (or call close()) to release the connection pool:

        with APIClient(config) as client:
            info = client.fetch_ticket_details("PROJ-123")

Testability:
    Inject an httpx.Client built on httpx.MockTransport, and a no-op
    sleeper, to exercise the retry loop without network or real waits.
"""

from __future__ import annotations

import json
import logging
import os
import random
import time
from collections.abc import Mapping
from types import TracebackType
from typing import Any
from urllib.parse import quote

import httpx

from jiralookup.config.fetch_config import TOKEN_ENV_VAR, JiraConfig
from jiralookup.integrations.adf import extract_adf_text
from jiralookup.integrations.base import JiraClient
from jiralookup.integrations.custom_fields import extract_custom_fields
from jiralookup.integrations.exceptions import (
    AuthenticationError,
    ConfigurationError,
    HttpStatusError,
    ParseError,
    ServerError,
    TicketNotFoundError,
    TicketPermissionError,
    TransportError,
    UnavailableError,
)
from jiralookup.integrations.models import TicketInfo
from jiralookup.integrations.retry import Clock, RandomSource, Sleeper, send_with_retry
from jiralookup.utils.logging import log_message

logger = logging.getLogger(__name__)

HTTP_OK = 200

ISSUE_ENDPOINT = "/rest/api/3/issue/{ticket_id}"

# Maximum length for error response body in exception messages
MAX_ERROR_BODY_LENGTH = 200

# Maximum length for debug log messages
MAX_DEBUG_LOG_LENGTH = 1000

# Dedicated exception class and message per HTTP status
_STATUS_ERRORS: dict[int, tuple[type[HttpStatusError], str]] = {
    401: (
        AuthenticationError,
        "Authentication failed: check your email and API token (HTTP 401)",
    ),
    403: (
        TicketPermissionError,
        "Access denied to ticket {ticket_id}: check your permissions (HTTP 403)",
    ),
    404: (TicketNotFoundError, "Ticket {ticket_id} not found (HTTP 404)"),
}


def _truncate(body: bytes, limit: int) -> str:
    text = body.decode("utf-8", errors="replace")
    if len(text) <= limit:
        return text
    return text[:limit] + "... [truncated]"


def _extract_error_messages(body: bytes) -> list[str]:
    """Return the "errorMessages" of a Jira error body, or [] if absent."""
    try:
        data = json.loads(body)
    except ValueError:
        return []
    if not isinstance(data, dict):
        return []
    messages = data.get("errorMessages")
    if not isinstance(messages, list):
        return []
    return [str(m) for m in messages if m]


def _name_of(value: Any) -> str:
    """Return the "name" of a Jira reference object such as status or priority."""
    if isinstance(value, Mapping):
        name = value.get("name")
        return name if isinstance(name, str) else ""
    return ""


class APIClient(JiraClient):
    """Fetches tickets from the Jira Cloud REST API.

    Token lookup precedence: JIRA_TOKEN environment variable, then the
    configured token.

    Attributes:
        base_url: Jira instance URL without a trailing slash
        email: Account email used for Basic authentication
        custom_fields: Friendly name -> Jira field ID to extract
    """

    def __init__(
        self,
        config: JiraConfig,
        *,
        http_client: httpx.Client | None = None,
        sleeper: Sleeper = time.sleep,
        random_source: RandomSource = random.random,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the client. No network I/O happens here.

        Args:
            config: Jira configuration (base_url, email and token are required)
            http_client: Optional shared HTTP client; it is not closed by close()
            sleeper: Waits between rate-limited attempts
            random_source: Jitter source for backoff
            clock: Current UTC time, for HTTP-date Retry-After hints

        Raises:
            ConfigurationError: If base_url, email or token is missing
        """
        token = os.environ.get(TOKEN_ENV_VAR) or config.token

        if not config.base_url:
            raise ConfigurationError("Jira base_url is required for API mode")
        if not config.email:
            raise ConfigurationError("Jira email is required for API mode")
        if not token:
            raise ConfigurationError(
                f"Jira token is required (set {TOKEN_ENV_VAR} env var or config)"
            )

        self.base_url = config.base_url.rstrip("/")
        self.email = config.email
        self._token = token
        self.custom_fields = config.custom_fields
        self._retry_config = config.retry
        self._timeout_seconds = config.timeout_seconds
        self._sleeper = sleeper
        self._random_source = random_source
        self._clock = clock

        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=httpx.Timeout(config.timeout_seconds)
        )

    @property
    def name(self) -> str:
        return "Jira API"

    def is_available(self) -> bool:
        """Check that all required connection fields are present."""
        return bool(self.base_url and self.email and self._token)

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            self._http_client.close()

    def __enter__(self) -> APIClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def fetch_ticket_details(self, ticket_id: str) -> TicketInfo:
        """Fetch a ticket from the REST API.

        Raises:
            UnavailableError: If the client is not configured
            RateLimitExhaustedError: If HTTP 429 persisted through all retries
            AuthenticationError: On HTTP 401
            TicketPermissionError: On HTTP 403
            TicketNotFoundError: On HTTP 404
            ServerError: On any other non-200 status
            TransportError: If the request could not be performed
            ParseError: If the response body is not a JSON object
        """
        if not self.is_available():
            raise UnavailableError("Jira API client is not configured", ticket_id=ticket_id)

        url = self.base_url + ISSUE_ENDPOINT.format(ticket_id=quote(ticket_id, safe=""))
        log_message(f"Fetching Jira ticket: {url}")

        def send() -> httpx.Response:
            return self._http_client.get(
                url,
                headers={"Accept": "application/json"},
                auth=httpx.BasicAuth(self.email, self._token),
                timeout=self._timeout_seconds,
            )

        try:
            response = send_with_retry(
                send,
                self._retry_config,
                sleeper=self._sleeper,
                random_source=self._random_source,
                clock=self._clock,
                ticket_id=ticket_id,
            )
        except httpx.HTTPError as e:
            raise TransportError(
                f"Failed to execute request for {ticket_id}: {e}",
                ticket_id=ticket_id,
                original_error=e,
            ) from e

        if response.status_code != HTTP_OK:
            raise self._map_http_error(response, ticket_id)

        info = self._parse_response(response.content, ticket_id)
        log_message(f"Fetched Jira details for {ticket_id}: {info.summary}")
        return info

    def _map_http_error(self, response: httpx.Response, ticket_id: str) -> HttpStatusError:
        """Build the exception matching a non-200 response."""
        status_code = response.status_code
        body = response.content
        error_messages = _extract_error_messages(body)

        if not error_messages and body:
            logger.debug(
                "Jira error response for %s (HTTP %d): %s",
                ticket_id,
                status_code,
                _truncate(body, MAX_DEBUG_LOG_LENGTH),
            )

        error_class, template = _STATUS_ERRORS.get(
            status_code, (ServerError, "Jira API error (HTTP {status_code})")
        )
        message = template.format(ticket_id=ticket_id, status_code=status_code)
        return error_class(
            message,
            status_code=status_code,
            ticket_id=ticket_id,
            error_messages=error_messages,
        )

    def _parse_response(self, body: bytes, ticket_id: str) -> TicketInfo:
        """Decode an issue response into a TicketInfo.

        Missing or null nested objects leave the matching field empty.
        """
        try:
            data = json.loads(body)
        except ValueError as e:
            raise ParseError(
                f"Failed to parse Jira response for {ticket_id}",
                ticket_id=ticket_id,
                raw_response=_truncate(body, MAX_ERROR_BODY_LENGTH),
                original_error=e,
            ) from e

        if not isinstance(data, dict):
            raise ParseError(
                f"Unexpected Jira response for {ticket_id}: expected a JSON object",
                ticket_id=ticket_id,
                raw_response=_truncate(body, MAX_ERROR_BODY_LENGTH),
            )

        raw_fields = data.get("fields")
        fields: Mapping[str, Any] = raw_fields if isinstance(raw_fields, Mapping) else {}

        summary = fields.get("summary")
        info = TicketInfo(
            type=_name_of(fields.get("issuetype")),
            summary=summary if isinstance(summary, str) else "",
            status=_name_of(fields.get("status")),
            priority=_name_of(fields.get("priority")),
            description=extract_adf_text(fields.get("description")),
        )

        if self.custom_fields:
            info.custom_fields = extract_custom_fields(fields, self.custom_fields)

        return info


__all__ = ["APIClient"]
