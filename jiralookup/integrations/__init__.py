"""Jira integrations for JIRALOOKUP.

This package provides:
- TicketInfo: Normalized ticket metadata
- JiraClient: Capability contract with CLI and REST API implementations
- create_jira_client: Factory selecting the implementation from config
- fetch_ticket_info: Log-and-continue helper for optional enrichment
"""

from jiralookup.integrations.adf import extract_adf_text
from jiralookup.integrations.api_client import APIClient
from jiralookup.integrations.base import JiraClient
from jiralookup.integrations.cli_client import CLIClient, parse_cli_output
from jiralookup.integrations.custom_fields import extract_custom_field_value
from jiralookup.integrations.exceptions import (
    AuthenticationError,
    CommandFailedError,
    ConfigurationError,
    HttpStatusError,
    ParseError,
    RateLimitExhaustedError,
    ServerError,
    TicketFetchError,
    TicketNotFoundError,
    TicketPermissionError,
    TransportError,
    UnavailableError,
)
from jiralookup.integrations.factory import create_jira_client, fetch_ticket_info
from jiralookup.integrations.models import TicketInfo
from jiralookup.integrations.tickets import parse_ticket_id

__all__ = [
    "APIClient",
    "AuthenticationError",
    "CLIClient",
    "CommandFailedError",
    "ConfigurationError",
    "HttpStatusError",
    "JiraClient",
    "ParseError",
    "RateLimitExhaustedError",
    "ServerError",
    "TicketFetchError",
    "TicketInfo",
    "TicketNotFoundError",
    "TicketPermissionError",
    "TransportError",
    "UnavailableError",
    "create_jira_client",
    "extract_adf_text",
    "extract_custom_field_value",
    "fetch_ticket_info",
    "parse_cli_output",
    "parse_ticket_id",
]
