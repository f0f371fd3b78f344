"""Sync commands: add, remove or set the active roles, and show the current ones."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated

import typer
from rich.markup import escape

from rolesync.cli._helpers import console, exit_with_error, format_packages

if TYPE_CHECKING:
    from rolesync.orchestrator import SyncOutcome


def _print_outcome(outcome: SyncOutcome) -> None:
    plan = outcome.plan
    for role in plan.empty_roles:
        console.print(
            f"[yellow]Warning:[/yellow] role '{escape(role)}' lists no tools "
            "(malformed or renamed role file?)"
        )

    if outcome.dry_run:
        console.print(f"[bold]Plan ({plan.operation}):[/bold]")
        console.print(f"  Install:   {escape(format_packages(plan.to_install))}")
        if plan.to_refresh:
            console.print(f"  Refresh:   {escape(format_packages(plan.to_refresh))}")
        console.print(f"  Uninstall: {escape(format_packages(plan.to_uninstall))}")
        console.print(f"  Roles:     {escape(', '.join(plan.new_roles) or '(none)')}")
        console.print("[dim]Dry run: nothing was changed.[/dim]")
        return

    if plan.is_noop:
        console.print("No package changes needed.")
    if outcome.installed:
        console.print(f"[green]Installed[/green] {escape(format_packages(outcome.installed))}")
    if outcome.uninstalled:
        console.print(
            f"[green]Uninstalled[/green] {escape(format_packages(outcome.uninstalled))}"
        )

    if outcome.persist_warning:
        console.print(
            f"[yellow]Warning:[/yellow] (persist) packages were applied but the role file "
            f"was not updated: {escape(outcome.persist_warning)}\n"
            "Re-run the same command to reconcile."
        )
    else:
        console.print(f"Active roles: {escape(', '.join(plan.new_roles) or '(none)')}")


def sync(
    roles: Annotated[list[str], typer.Argument(help="Role names (e.g. blue-teamer.txt)")],
    remove: Annotated[
        bool, typer.Option("--remove", "-r", help="Remove the roles and their unique tools")
    ] = False,
    update: Annotated[
        bool,
        typer.Option("--update", "-u", help="Make the given roles the exact active set"),
    ] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show the plan without changing anything")
    ] = False,
) -> None:
    """Add roles (default), remove them, or set the exact active role set."""
    from rolesync.cli._helpers import build_orchestrator, load_settings_or_exit
    from rolesync.errors import PlanError, RoleSyncError
    from rolesync.models import Operation

    if remove and update:
        exit_with_error(PlanError("--remove and --update cannot be combined"))

    operation = Operation.REMOVE if remove else Operation.SET if update else Operation.ADD
    orchestrator = build_orchestrator(load_settings_or_exit())

    try:
        outcome = orchestrator.run(operation, roles, dry_run=dry_run)
    except RoleSyncError as e:
        exit_with_error(e)

    _print_outcome(outcome)


def current() -> None:
    """Show the currently active roles."""
    from rolesync.config import get_roles_file
    from rolesync.errors import ConfigStoreError
    from rolesync.store import RoleSetStore

    try:
        roles = RoleSetStore(get_roles_file()).read()
    except ConfigStoreError as e:
        exit_with_error(e)

    if not roles:
        console.print("No roles configured. Use [bold]rolesync sync <role>...[/bold] to add roles.")
        return
    for role in roles:
        console.print(escape(role))
