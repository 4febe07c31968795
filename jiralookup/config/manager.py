"""Configuration manager for JIRALOOKUP.

Configuration is loaded with a cascading hierarchy:

    1. Environment Variables (highest priority)
    2. Local Config (.jiralookup in project/parent directories)
    3. Global Config (~/.jiralookup-config)
    4. Built-in Defaults (lowest priority)

Files hold KEY=VALUE lines and are parsed line by line; nothing is
evaluated.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path

from rich.table import Table

from jiralookup.config.fetch_config import JiraConfig, RetryConfig, parse_custom_fields
from jiralookup.config.settings import CONFIG_FILE, Settings
from jiralookup.utils.console import console, print_header
from jiralookup.utils.env_utils import expand_env_vars, redact
from jiralookup.utils.logging import log_message

logger = logging.getLogger(__name__)

_LINE_PATTERN = re.compile(r"^([a-zA-Z_][a-zA-Z0-9_]*)=(.*)$")


class ConfigManager:
    """Loads configuration with cascading precedence.

    Attributes:
        settings: Current settings instance
        global_config_path: Path to the global ~/.jiralookup-config file
        local_config_path: Path to the discovered local .jiralookup file (after load)
    """

    LOCAL_CONFIG_NAME = ".jiralookup"

    def __init__(self, global_config_path: Path | None = None) -> None:
        """Initialize the configuration manager.

        Args:
            global_config_path: Optional custom path to the global config file.
                                Defaults to ~/.jiralookup-config.
        """
        self.global_config_path = global_config_path or CONFIG_FILE
        self.local_config_path: Path | None = None
        self.settings = Settings()
        self._raw_values: dict[str, str] = {}
        self._config_sources: dict[str, str] = {}

    def load(self) -> Settings:
        """Load configuration from all sources.

        Each call starts again from the built-in defaults, so repeated
        loads never keep stale values.

        Returns:
            Settings instance with loaded values
        """
        self.settings = Settings()
        self.local_config_path = None
        self._raw_values = {}
        self._config_sources = {}

        if self.global_config_path.exists():
            log_message(f"Loading global configuration from {self.global_config_path}")
            self._load_file(self.global_config_path, source="global")

        local_path = self._find_local_config()
        if local_path:
            self.local_config_path = local_path
            log_message(f"Loading local configuration from {local_path}")
            self._load_file(local_path, source=f"local ({local_path})")

        self._load_environment()

        for key, value in self._raw_values.items():
            self._apply_value_to_settings(key, value)

        log_message(f"Configuration loaded successfully ({len(self._raw_values)} keys)")
        return self.settings

    def _find_local_config(self) -> Path | None:
        """Find a local .jiralookup file by walking up from the CWD.

        Stops at the first directory containing .git, or at the
        filesystem root.
        """
        current = Path.cwd()
        while True:
            config_path = current / self.LOCAL_CONFIG_NAME
            if config_path.is_file():
                return config_path

            if (current / ".git").exists():
                break

            parent = current.parent
            if parent == current:
                break
            current = parent

        return None

    def _load_file(self, path: Path, source: str) -> None:
        """Load KEY=VALUE pairs from a config file.

        Surrounding double or single quotes are stripped from values.
        Blank lines and lines starting with # are ignored.
        """
        with path.open() as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue

                match = _LINE_PATTERN.match(line)
                if not match:
                    continue

                key, value = match.groups()
                if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
                    value = value[1:-1]

                self._raw_values[key] = value
                self._config_sources[key] = source

    def _load_environment(self) -> None:
        """Override config with environment variables for known keys only."""
        for key in Settings.get_config_keys():
            env_value = os.environ.get(key)
            if env_value is not None:
                self._raw_values[key] = env_value
                self._config_sources[key] = "environment"

    def _apply_value_to_settings(self, key: str, value: str) -> None:
        """Apply a raw config value to the settings object, converting its type."""
        attr = self.settings.get_attribute_for_key(key)
        if attr is None:
            return

        current_value = getattr(self.settings, attr)

        if isinstance(current_value, bool):
            setattr(self.settings, attr, value.strip().lower() in ("true", "1", "yes"))
        elif isinstance(current_value, int | float):
            converter = type(current_value)
            try:
                setattr(self.settings, attr, converter(value))
            except ValueError:
                logger.warning(f"Invalid {key} value '{value}', using default {current_value}")
        else:
            setattr(self.settings, attr, value)

    def get(self, key: str, default: str = "") -> str:
        """Get a raw configuration value.

        Args:
            key: Configuration key to retrieve
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self._raw_values.get(key, default)

    def get_source(self, key: str) -> str:
        """Describe where a key's value came from ("default" if unset)."""
        return self._config_sources.get(key, "default")

    def get_retry_config(self) -> RetryConfig:
        """Build the HTTP 429 retry configuration.

        Out-of-range values are logged and replaced by the defaults.
        """
        defaults = RetryConfig()
        max_retries = self.settings.fetch_max_retries
        base_delay = self.settings.fetch_retry_delay_seconds
        max_delay = self.settings.fetch_max_retry_delay_seconds

        if max_retries < 0:
            logger.warning(
                f"FETCH_MAX_RETRIES must be >= 0, got {max_retries}, "
                f"using default {defaults.max_retries}"
            )
            max_retries = defaults.max_retries
        if base_delay <= 0:
            logger.warning(
                f"FETCH_RETRY_DELAY_SECONDS must be > 0, got {base_delay}, "
                f"using default {defaults.base_delay_seconds}"
            )
            base_delay = defaults.base_delay_seconds
        if max_delay < base_delay:
            logger.warning(
                f"FETCH_MAX_RETRY_DELAY_SECONDS must be >= {base_delay}, got {max_delay}, "
                f"using {max(defaults.max_delay_seconds, base_delay)}"
            )
            max_delay = max(defaults.max_delay_seconds, base_delay)

        return RetryConfig(
            max_retries=max_retries,
            base_delay_seconds=base_delay,
            max_delay_seconds=max_delay,
            jitter_factor=defaults.jitter_factor,
        )

    def get_jira_config(self) -> JiraConfig:
        """Build the immutable Jira client configuration.

        ${VAR} references in values are expanded from the environment.

        Returns:
            JiraConfig for the client factory
        """
        s = self.settings

        custom_fields, rejected = parse_custom_fields(
            expand_env_vars(s.jira_custom_fields, context="JIRA_CUSTOM_FIELDS")
        )
        for entry in rejected:
            logger.warning(f"Ignoring malformed JIRA_CUSTOM_FIELDS entry '{entry}'")

        timeout = s.fetch_timeout_seconds
        if timeout <= 0:
            logger.warning(f"FETCH_TIMEOUT_SECONDS must be > 0, got {timeout}, using default 30")
            timeout = 30.0

        return JiraConfig(
            enabled=s.jira_enabled,
            mode=s.jira_mode.strip().lower(),
            cli_command=s.jira_cli_command.strip(),
            base_url=expand_env_vars(s.jira_base_url, context="JIRA_BASE_URL").strip(),
            email=expand_env_vars(s.jira_email, context="JIRA_EMAIL").strip(),
            token=expand_env_vars(s.jira_token, context="JIRA_TOKEN").strip(),
            custom_fields=custom_fields,
            timeout_seconds=timeout,
            retry=self.get_retry_config(),
        )

    def show(self) -> None:
        """Display the effective configuration with secrets redacted."""
        print_header("JIRALOOKUP Configuration")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Key")
        table.add_column("Value")
        table.add_column("Source", style="dim")

        for key in Settings.get_config_keys():
            attr = self.settings.get_attribute_for_key(key)
            value = str(getattr(self.settings, attr)) if attr else ""
            table.add_row(key, redact(key, value), self.get_source(key))

        console.print(table)
        if self.local_config_path:
            console.print(f"Local config: {self.local_config_path}")
        console.print(f"Global config: {self.global_config_path}")


__all__ = ["ConfigManager"]
