"""JIRALOOKUP - Jira ticket metadata retrieval.

This package turns a Jira ticket identifier into a normalized
TicketInfo record, either through a locally installed tracker CLI
or through the Jira Cloud REST API.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
