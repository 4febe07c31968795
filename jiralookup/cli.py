"""Command-line interface for JIRALOOKUP.

Commands:
    view TICKET   Fetch and display ticket metadata
    check         Report whether the configured backend can be used
    config        Show the effective configuration
"""

from __future__ import annotations

import dataclasses
import json
from typing import Annotated, NoReturn

import typer
from rich.table import Table

from jiralookup.config.fetch_config import JiraConfig
from jiralookup.config.manager import ConfigManager
from jiralookup.integrations.api_client import APIClient
from jiralookup.integrations.exceptions import TicketFetchError
from jiralookup.integrations.factory import create_jira_client
from jiralookup.integrations.models import TicketInfo
from jiralookup.integrations.tickets import parse_ticket_id
from jiralookup.utils.console import (
    console,
    print_error,
    print_info,
    print_success,
    print_warning,
    show_version,
)
from jiralookup.utils.errors import ExitCode, JiraLookupError
from jiralookup.utils.logging import setup_logging

app = typer.Typer(
    name="jiralookup",
    help="JIRALOOKUP - Fetch Jira ticket metadata via the tracker CLI or REST API",
    add_completion=False,
    no_args_is_help=True,
)

ModeOption = Annotated[
    str | None,
    typer.Option(
        "--mode",
        "-m",
        help="Override the configured backend (cli or api)",
    ),
]


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        show_version()
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Fetch Jira ticket metadata."""
    setup_logging()


def _fail(error: JiraLookupError) -> NoReturn:
    print_error(str(error))
    raise typer.Exit(code=error.exit_code)


def _load_jira_config(mode: str | None) -> tuple[ConfigManager, JiraConfig]:
    config = ConfigManager()
    config.load()
    jira_config = config.get_jira_config()
    if mode is not None:
        jira_config = dataclasses.replace(jira_config, mode=mode)
    return config, jira_config


def _render_ticket(ticket_id: str, info: TicketInfo) -> None:
    table = Table(title=ticket_id, show_header=False, title_style="bold magenta")
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")

    table.add_row("Type", info.type)
    table.add_row("Summary", info.summary)
    table.add_row("Status", info.status)
    if info.priority:
        table.add_row("Priority", info.priority)
    for name, value in sorted((info.custom_fields or {}).items()):
        table.add_row(name, value)

    console.print(table)
    if info.description:
        console.print()
        console.print("[bold]Description[/bold]")
        console.print(info.description, markup=False)


@app.command()
def view(
    ticket: Annotated[
        str,
        typer.Argument(help="Ticket key, numeric ID, or Jira /browse/ URL"),
    ],
    mode: ModeOption = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the ticket as JSON"),
    ] = False,
) -> None:
    """Fetch and display metadata for a ticket."""
    config, jira_config = _load_jira_config(mode)

    try:
        ticket_id = parse_ticket_id(ticket, config.settings.default_jira_project)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(code=ExitCode.GENERAL_ERROR) from None

    try:
        client = create_jira_client(jira_config)
        try:
            info = client.fetch_ticket_details(ticket_id)
        finally:
            if isinstance(client, APIClient):
                client.close()
    except TicketFetchError as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps({"id": ticket_id, **info.to_dict()}, indent=2))
    else:
        _render_ticket(ticket_id, info)


@app.command()
def check(mode: ModeOption = None) -> None:
    """Check whether the configured Jira backend is available."""
    _, jira_config = _load_jira_config(mode)

    try:
        client = create_jira_client(jira_config)
    except TicketFetchError as e:
        _fail(e)

    print_info(f"Checking {client.name}")
    try:
        available = client.is_available()
    finally:
        if isinstance(client, APIClient):
            client.close()

    if available:
        print_success(f"{client.name} is available")
    else:
        print_warning(f"{client.name} is not available")
        raise typer.Exit(code=ExitCode.BACKEND_UNAVAILABLE)


@app.command("config")
def show_config() -> None:
    """Show the effective configuration (secrets redacted)."""
    config = ConfigManager()
    config.load()
    config.show()


def run() -> None:
    """Entry point for the console script."""
    app()


__all__ = ["app", "run"]
