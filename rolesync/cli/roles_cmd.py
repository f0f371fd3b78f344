"""Role catalog commands: list the roles a provider offers."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from rolesync.cli._helpers import console, exit_with_error


def list_roles(
    show_all: Annotated[
        bool, typer.Option("--all", "-a", help="Also fetch and show each role's tools")
    ] = False,
) -> None:
    """List the roles available from the configured provider."""
    from rolesync.catalog import describe_roles, list_available_roles
    from rolesync.cli._helpers import create_provider_or_exit, load_settings_or_exit
    from rolesync.errors import FetchError

    settings = load_settings_or_exit()
    provider = create_provider_or_exit(settings)

    try:
        roles = list_available_roles(provider)
    except FetchError as e:
        exit_with_error(e)

    if not roles:
        console.print("No roles are defined by the provider.")
        return

    if not show_all:
        for role in roles:
            console.print(escape(role))
        return

    table = Table(title="Available Roles")
    table.add_column("Role", style="cyan")
    table.add_column("Tools")

    for listing in describe_roles(provider, roles, max_workers=settings.max_workers):
        if listing.error:
            tools = f"[red]{escape(listing.error)}[/red]"
        elif not listing.tools:
            tools = "[dim]No tools listed for this role[/dim]"
        else:
            tools = escape(", ".join(listing.tools))
        table.add_row(escape(listing.role), tools)

    console.print(table)
