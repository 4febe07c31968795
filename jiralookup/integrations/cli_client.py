"""Jira client backed by a locally installed tracker CLI.

Runs ``{executable} jira workitem view {ticket}`` and parses its
line-oriented ``Field: value`` output.
"""

from __future__ import annotations

import re
import shutil
import subprocess

from jiralookup.config.fetch_config import DEFAULT_CLI_COMMAND, DEFAULT_TIMEOUT_SECONDS
from jiralookup.integrations.base import JiraClient
from jiralookup.integrations.exceptions import (
    CommandFailedError,
    ConfigurationError,
    ParseError,
    UnavailableError,
)
from jiralookup.integrations.models import TicketInfo
from jiralookup.utils.logging import log_command, log_message

# Executable names may only contain these characters; anything else could
# smuggle shell syntax in through the configuration file.
VALID_COMMAND_PATTERN = re.compile(r"^[A-Za-z0-9_/-]+$")

# A line that starts a new field: capitalized words followed by a colon.
# Description text shaped like "Root: cause" also matches and ends the
# description early.
NEW_FIELD_PATTERN = re.compile(r"^[A-Z][a-zA-Z\s]*:")

VIEW_SUBCOMMAND = ("jira", "workitem", "view")

# Maximum length of stderr kept on CommandFailedError
MAX_STDERR_LENGTH = 200

_SIMPLE_FIELDS = (
    ("Type:", "type"),
    ("Summary:", "summary"),
    ("Status:", "status"),
)
_DESCRIPTION_PREFIX = "Description:"


def is_new_field(line: str) -> bool:
    """Check if a line starts a new "Field:" entry."""
    return NEW_FIELD_PATTERN.match(line) is not None


def parse_cli_output(output: str) -> TicketInfo:
    """Parse the text output of the ``jira workitem view`` command.

    Every line is stripped before matching. "Type:", "Summary:" and
    "Status:" lines set the matching field. "Description:" starts a
    multi-line block that runs until the next line that looks like a new
    field; blank lines inside it are kept once text has been seen, and
    trailing blank lines are dropped.

    Args:
        output: Decoded standard output of the CLI

    Returns:
        TicketInfo with the recognized fields set
    """
    info = TicketInfo()
    in_description = False
    description_lines: list[str] = []

    for raw_line in output.split("\n"):
        line = raw_line.strip()

        if in_description:
            if not is_new_field(line):
                if line or description_lines:
                    description_lines.append(line)
                continue
            in_description = False

        if line.startswith(_DESCRIPTION_PREFIX):
            in_description = True
            continue

        for prefix, attr in _SIMPLE_FIELDS:
            if line.startswith(prefix):
                setattr(info, attr, line[len(prefix) :].strip())
                break

    while description_lines and not description_lines[-1]:
        description_lines.pop()
    info.description = "\n".join(description_lines)

    return info


class CLIClient(JiraClient):
    """Fetches tickets by running the tracker CLI.

    Attributes:
        cli_command: Executable name or path, validated at construction
        timeout_seconds: Maximum run time of one CLI invocation
    """

    def __init__(
        self,
        cli_command: str = DEFAULT_CLI_COMMAND,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize the client.

        Raises:
            ConfigurationError: If cli_command contains characters outside
                [A-Za-z0-9_/-]
        """
        if not VALID_COMMAND_PATTERN.match(cli_command):
            raise ConfigurationError(
                f"Invalid Jira CLI command '{cli_command}': only letters, digits, "
                "'_', '-' and '/' are allowed"
            )
        self.cli_command = cli_command
        self.timeout_seconds = timeout_seconds

    @property
    def name(self) -> str:
        return "Jira CLI"

    def is_available(self) -> bool:
        """Check if the executable can be found on PATH."""
        return shutil.which(self.cli_command) is not None

    def fetch_ticket_details(self, ticket_id: str) -> TicketInfo:
        """Run the CLI for a ticket and parse its output.

        Raises:
            UnavailableError: If the executable is not on PATH (it is not run)
            CommandFailedError: If the CLI exits non-zero or times out
            ParseError: If the output is not valid UTF-8
        """
        if not self.is_available():
            log_message(f"Jira CLI command '{self.cli_command}' not found")
            raise UnavailableError(
                f"Jira CLI command '{self.cli_command}' not available",
                ticket_id=ticket_id,
            )

        command = [self.cli_command, *VIEW_SUBCOMMAND, ticket_id]
        command_str = " ".join(command)

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                stdin=subprocess.DEVNULL,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired as e:
            log_command(command_str, -1)
            raise CommandFailedError(
                f"Jira CLI timed out after {self.timeout_seconds:g}s fetching {ticket_id}",
                ticket_id=ticket_id,
            ) from e
        except OSError as e:
            raise UnavailableError(
                f"Failed to run Jira CLI '{self.cli_command}': {e}",
                ticket_id=ticket_id,
            ) from e

        log_command(command_str, result.returncode)

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise CommandFailedError(
                f"Failed to fetch Jira details for {ticket_id} "
                f"(exit code {result.returncode})",
                ticket_id=ticket_id,
                returncode=result.returncode,
                stderr=stderr[:MAX_STDERR_LENGTH],
            )

        try:
            output = result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(
                f"Jira CLI output for {ticket_id} is not valid UTF-8",
                ticket_id=ticket_id,
                original_error=e,
            ) from e

        info = parse_cli_output(output)
        log_message(f"Fetched Jira details for {ticket_id}: {info.summary}")
        return info


__all__ = [
    "CLIClient",
    "NEW_FIELD_PATTERN",
    "VALID_COMMAND_PATTERN",
    "is_new_field",
    "parse_cli_output",
]
