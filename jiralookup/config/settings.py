"""Settings dataclass for JIRALOOKUP configuration.

Holds every configuration value along with the mapping between config
file keys (JIRA_BASE_URL) and attribute names (jira_base_url).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    """Configuration settings for JIRALOOKUP.

    All settings have defaults and can be overridden from the config
    files or the environment.

    Attributes:
        jira_enabled: Whether ticket enrichment is attempted at all
        jira_mode: Backend selection ("cli", "api", or "" for cli)
        jira_cli_command: Executable used in CLI mode
        jira_base_url: Jira instance URL for API mode
        jira_email: Account email for API mode
        jira_token: API token for API mode
        jira_custom_fields: "name=fieldid" pairs separated by commas
        default_jira_project: Project key for numeric-only ticket IDs
        fetch_timeout_seconds: Per-request timeout
        fetch_max_retries: Retries on HTTP 429
        fetch_retry_delay_seconds: Base backoff delay
        fetch_max_retry_delay_seconds: Cap on the backoff delay
    """

    # Jira settings
    jira_enabled: bool = True
    jira_mode: str = ""
    jira_cli_command: str = "acli"
    jira_base_url: str = ""
    jira_email: str = ""
    jira_token: str = ""
    jira_custom_fields: str = ""
    default_jira_project: str = ""

    # Fetch performance settings
    fetch_timeout_seconds: float = 30.0
    fetch_max_retries: int = 3
    fetch_retry_delay_seconds: float = 1.0
    fetch_max_retry_delay_seconds: float = 30.0

    # Config key to attribute mapping
    _key_mapping: dict[str, str] = field(
        default_factory=lambda: {
            "JIRA_ENABLED": "jira_enabled",
            "JIRA_MODE": "jira_mode",
            "JIRA_CLI_COMMAND": "jira_cli_command",
            "JIRA_BASE_URL": "jira_base_url",
            "JIRA_EMAIL": "jira_email",
            "JIRA_TOKEN": "jira_token",
            "JIRA_CUSTOM_FIELDS": "jira_custom_fields",
            "DEFAULT_JIRA_PROJECT": "default_jira_project",
            "FETCH_TIMEOUT_SECONDS": "fetch_timeout_seconds",
            "FETCH_MAX_RETRIES": "fetch_max_retries",
            "FETCH_RETRY_DELAY_SECONDS": "fetch_retry_delay_seconds",
            "FETCH_MAX_RETRY_DELAY_SECONDS": "fetch_max_retry_delay_seconds",
        },
        repr=False,
    )

    def get_attribute_for_key(self, key: str) -> str | None:
        """Get the attribute name for a config key."""
        return self._key_mapping.get(key)

    def get_key_for_attribute(self, attr: str) -> str | None:
        """Get the config key for an attribute name."""
        for key, value in self._key_mapping.items():
            if value == attr:
                return key
        return None

    @classmethod
    def get_config_keys(cls) -> list[str]:
        """Get list of all valid configuration keys."""
        temp = cls()
        return list(temp._key_mapping.keys())


# Default configuration file path
CONFIG_FILE = Path.home() / ".jiralookup-config"
