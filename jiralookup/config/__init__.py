"""Configuration management for JIRALOOKUP."""

from jiralookup.config.fetch_config import JiraConfig, JiraMode, RetryConfig
from jiralookup.config.manager import ConfigManager
from jiralookup.config.settings import CONFIG_FILE, Settings

__all__ = [
    "CONFIG_FILE",
    "ConfigManager",
    "JiraConfig",
    "JiraMode",
    "RetryConfig",
    "Settings",
]
