"""Normalized ticket record returned by every Jira client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class TicketInfo:
    """Ticket metadata normalized from CLI output or the REST API.

    Absent values are empty strings rather than errors.

    Attributes:
        type: Issue type name (e.g., "Bug")
        summary: One-line ticket title
        status: Workflow status name
        priority: Priority name (API-backed fetches only)
        description: Plain-text description, flattened from rich text
        custom_fields: Friendly name -> display value. None when no
            custom fields were requested for the fetch.
    """

    type: str = ""
    summary: str = ""
    status: str = ""
    priority: str = ""
    description: str = ""
    custom_fields: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data: dict[str, Any] = {
            "type": self.type,
            "summary": self.summary,
            "status": self.status,
            "priority": self.priority,
            "description": self.description,
        }
        if self.custom_fields is not None:
            data["custom_fields"] = dict(self.custom_fields)
        return data


__all__ = ["TicketInfo"]
