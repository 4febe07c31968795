"""Ticket identifier parsing.

Accepts the forms a user is likely to paste:
- Ticket keys: PROJ-123, proj-123 (normalized to upper case)
- Browse URLs: https://company.atlassian.net/browse/PROJ-123
- Numeric IDs: 123 (requires a default project key)
"""

from __future__ import annotations

import re

from jiralookup.utils.logging import log_message

_KEY_PATTERN = re.compile(r"^(?P<key>[A-Za-z][A-Za-z0-9]*-\d+)$")
_URL_PATTERN = re.compile(r"^https?://[^/]+/browse/(?P<key>[A-Za-z][A-Za-z0-9]*-\d+)(?:[/?#].*)?$")
_NUMERIC_PATTERN = re.compile(r"^\d+$")


def parse_ticket_id(input_str: str, default_project: str = "") -> str:
    """Parse user input into a normalized Jira ticket key.

    Args:
        input_str: Ticket key, browse URL, or numeric ID
        default_project: Project key used for numeric-only input

    Returns:
        Upper-case ticket key (e.g., "PROJ-123")

    Raises:
        ValueError: If the input is not recognized, or is numeric and
            no default project is given
    """
    input_str = input_str.strip()

    match = _URL_PATTERN.match(input_str)
    if match:
        ticket_id = match.group("key").upper()
        log_message(f"Parsed ticket from URL: {ticket_id}")
        return ticket_id

    match = _KEY_PATTERN.match(input_str)
    if match:
        return match.group("key").upper()

    if _NUMERIC_PATTERN.match(input_str):
        if not default_project:
            raise ValueError(
                "Numeric ticket ID requires a default project key. "
                "Set DEFAULT_JIRA_PROJECT or provide a PROJECT-123 ID."
            )
        ticket_id = f"{default_project.strip().upper()}-{input_str}"
        log_message(f"Parsed numeric ticket with default project: {ticket_id}")
        return ticket_id

    raise ValueError(
        f"Invalid ticket '{input_str}'. Expected PROJECT-123, a numeric ID with a "
        "default project, or a Jira /browse/ URL"
    )


__all__ = ["parse_ticket_id"]
