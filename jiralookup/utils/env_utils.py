"""Environment variable helpers for configuration values.

Configuration values may reference environment variables with the
``${VAR}`` syntax so that secrets such as API tokens can live outside
the configuration files.
"""

from __future__ import annotations

import logging
import os
import re

# Keys containing these substrings hold secrets and are never logged or displayed
SENSITIVE_KEY_PATTERNS = ("TOKEN", "KEY", "SECRET", "PASSWORD", "CREDENTIAL")

REDACTED = "<REDACTED>"

_ENV_REFERENCE = re.compile(r"\$\{([^}]+)\}")

logger = logging.getLogger(__name__)


def is_sensitive_key(key: str) -> bool:
    """Check if a configuration key names a secret.

    Args:
        key: The configuration key name

    Returns:
        True if the key is considered sensitive
    """
    key_upper = key.upper()
    return any(pattern in key_upper for pattern in SENSITIVE_KEY_PATTERNS)


def redact(key: str, value: str) -> str:
    """Return a display-safe version of a configuration value."""
    if value and is_sensitive_key(key):
        return REDACTED
    return value


def expand_env_vars(value: str, context: str = "") -> str:
    """Expand ``${VAR}`` references in a configuration value.

    Unset variables are left in place (so the problem stays visible) and
    a warning is logged. The context is omitted from the warning when it
    names a sensitive key.

    Args:
        value: Raw configuration value
        context: Configuration key the value came from

    Returns:
        The value with known references replaced
    """

    def replace(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            if context and not is_sensitive_key(context):
                logger.warning(f"Environment variable '{var_name}' not set in {context}")
            else:
                logger.warning(f"Environment variable '{var_name}' not set")
            return match.group(0)
        return env_value

    return _ENV_REFERENCE.sub(replace, value)


__all__ = [
    "REDACTED",
    "SENSITIVE_KEY_PATTERNS",
    "expand_env_vars",
    "is_sensitive_key",
    "redact",
]
