"""Factory selecting the Jira client implementation from configuration.

The backend is chosen once, from JiraConfig.mode:
- "api": APIClient (Jira Cloud REST API)
- "cli" or "": CLIClient (local tracker CLI)

There is no automatic fallback from one backend to the other.
"""

from __future__ import annotations

import logging
from typing import Any

from jiralookup.config.fetch_config import JiraConfig, JiraMode
from jiralookup.integrations.api_client import APIClient
from jiralookup.integrations.base import JiraClient
from jiralookup.integrations.cli_client import CLIClient
from jiralookup.integrations.exceptions import ConfigurationError, TicketFetchError
from jiralookup.integrations.models import TicketInfo
from jiralookup.utils.logging import log_message

logger = logging.getLogger(__name__)


def resolve_mode(mode: str) -> JiraMode:
    """Map a configured mode string to a JiraMode.

    Raises:
        ConfigurationError: If the mode is neither "cli", "api" nor empty
    """
    normalized = mode.strip().lower()
    if not normalized:
        return JiraMode.CLI
    try:
        return JiraMode(normalized)
    except ValueError:
        valid = ", ".join(m.value for m in JiraMode)
        raise ConfigurationError(
            f"unknown jira mode '{mode}' (allowed values: {valid})"
        ) from None


def create_jira_client(config: JiraConfig | None, **api_options: Any) -> JiraClient:
    """Create the Jira client selected by the configuration.

    Args:
        config: Jira configuration
        **api_options: Extra keyword arguments for APIClient
            (http_client, sleeper, random_source, clock)

    Returns:
        A CLIClient or APIClient

    Raises:
        ConfigurationError: If config is None, the mode is unknown, or the
            selected client rejects its settings
    """
    if config is None:
        raise ConfigurationError("Jira configuration is required")

    mode = resolve_mode(config.mode)
    if mode is JiraMode.API:
        return APIClient(config, **api_options)
    return CLIClient(config.cli_command, timeout_seconds=config.timeout_seconds)


def fetch_ticket_info(
    ticket_id: str,
    config: JiraConfig,
    *,
    enabled: bool | None = None,
    **api_options: Any,
) -> TicketInfo | None:
    """Fetch ticket metadata for optional enrichment.

    Failures are logged and turned into None so the calling workflow can
    carry on without ticket details.

    Args:
        ticket_id: Jira issue key
        config: Jira configuration
        enabled: When False, skip the lookup entirely. Defaults to
            config.enabled (the JIRA_ENABLED setting).
        **api_options: Extra keyword arguments for APIClient

    Returns:
        TicketInfo, or None when disabled or on any fetch failure
    """
    if enabled is None:
        enabled = config is None or config.enabled
    if not enabled:
        log_message(f"Jira enrichment disabled, skipping {ticket_id}")
        return None

    try:
        client = create_jira_client(config, **api_options)
        try:
            return client.fetch_ticket_details(ticket_id)
        finally:
            if isinstance(client, APIClient):
                client.close()
    except TicketFetchError as e:
        logger.warning("Could not fetch Jira details for %s: %s", ticket_id, e)
        return None


__all__ = [
    "create_jira_client",
    "fetch_ticket_info",
    "resolve_mode",
]
