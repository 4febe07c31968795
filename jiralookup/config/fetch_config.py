"""Fetch configuration for JIRALOOKUP.

This module defines the immutable configuration objects handed to the
Jira clients: which backend to use, how to reach it, and how to retry
when the REST API rate limits us.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

DEFAULT_CLI_COMMAND = "acli"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Environment variable that overrides any configured API token
TOKEN_ENV_VAR = "JIRA_TOKEN"


class JiraMode(Enum):
    """Backend used to fetch ticket metadata.

    Attributes:
        CLI: Parse the text output of a locally installed tracker CLI
        API: Call the Jira Cloud REST API directly
    """

    CLI = "cli"
    API = "api"


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for HTTP 429 retry handling.

    The delay for retry N (0-indexed) is
    ``min(base * 2**N, max) * uniform(1 - jitter, 1 + jitter)``.

    Attributes:
        max_retries: Retries after the first request (total attempts = max_retries + 1)
        base_delay_seconds: Delay before the first retry, before jitter
        max_delay_seconds: Cap on the exponential delay (before jitter) and on
            Retry-After hints
        jitter_factor: Relative jitter; 0.2 gives delays within ±20%
    """

    max_retries: int = 3
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 30.0
    jitter_factor: float = 0.2

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.max_retries > 0 and self.base_delay_seconds <= 0:
            raise ValueError("base_delay_seconds must be > 0 when max_retries > 0")
        if self.jitter_factor < 0 or self.jitter_factor > 1:
            raise ValueError("jitter_factor must be in [0, 1]")
        if self.max_delay_seconds < self.base_delay_seconds:
            raise ValueError("max_delay_seconds must be >= base_delay_seconds")


@dataclass(frozen=True)
class JiraConfig:
    """Settings consumed by the Jira client factory.

    Attributes:
        enabled: Whether ticket enrichment should be attempted at all
        mode: "cli", "api", or "" (treated as "cli")
        cli_command: Executable invoked in CLI mode
        base_url: Jira instance URL for API mode
        email: Account email for API mode
        token: API token for API mode (JIRA_TOKEN env var takes precedence)
        custom_fields: Friendly name -> Jira field ID, read-only
        timeout_seconds: Per-request HTTP timeout in API mode,
            and the subprocess timeout in CLI mode
        retry: HTTP 429 retry settings for API mode
    """

    enabled: bool = True
    mode: str = ""
    cli_command: str = DEFAULT_CLI_COMMAND
    base_url: str = ""
    email: str = ""
    token: str = ""
    custom_fields: Mapping[str, str] = field(default_factory=dict)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    retry: RetryConfig = field(default_factory=RetryConfig)

    def __post_init__(self) -> None:
        # Freeze the mapping so a shared config cannot be mutated by one caller
        object.__setattr__(self, "custom_fields", MappingProxyType(dict(self.custom_fields)))
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")


def parse_custom_fields(value: str) -> tuple[dict[str, str], list[str]]:
    """Parse a "name=fieldid,name2=fieldid2" custom field mapping.

    Args:
        value: Raw configuration value

    Returns:
        (mapping, rejected) where rejected lists entries that were skipped
        because they lacked "=" or had an empty side

    Example:
        >>> parse_custom_fields("story_points=customfield_10016, team=customfield_10001")
        ({'story_points': 'customfield_10016', 'team': 'customfield_10001'}, [])
    """
    mapping: dict[str, str] = {}
    rejected: list[str] = []
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        name, sep, field_id = entry.partition("=")
        name, field_id = name.strip(), field_id.strip()
        if not sep or not name or not field_id:
            rejected.append(entry)
            continue
        mapping[name] = field_id
    return mapping, rejected


__all__ = [
    "DEFAULT_CLI_COMMAND",
    "DEFAULT_TIMEOUT_SECONDS",
    "TOKEN_ENV_VAR",
    "JiraConfig",
    "JiraMode",
    "RetryConfig",
    "parse_custom_fields",
]
