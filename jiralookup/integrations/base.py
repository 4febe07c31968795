"""Capability contract shared by every Jira client."""

from __future__ import annotations

from abc import ABC, abstractmethod

from jiralookup.integrations.models import TicketInfo


class JiraClient(ABC):
    """Fetches ticket metadata from Jira.

    Implementations are built once from configuration and hold no
    mutable state afterwards; every fetch is independent.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable backend name."""
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the backend is ready to be invoked.

        Returns:
            True if fetch_ticket_details can be attempted
        """
        pass

    @abstractmethod
    def fetch_ticket_details(self, ticket_id: str) -> TicketInfo:
        """Fetch and normalize metadata for a ticket.

        Args:
            ticket_id: Jira issue key (e.g., "PROJ-123")

        Returns:
            Populated TicketInfo (absent fields are empty strings)

        Raises:
            TicketFetchError: Or one of its subclasses, on any failure
        """
        pass


__all__ = ["JiraClient"]
