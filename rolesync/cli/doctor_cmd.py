"""Doctor command: check settings, package manager, privileges and provider."""

from __future__ import annotations

import shutil

from rich.markup import escape
from rich.table import Table

from rolesync.cli._helpers import console


def doctor() -> None:
    """Check configuration, package manager, privileges and provider reachability."""
    from rolesync._privilege import is_root
    from rolesync.cli._helpers import create_provider_or_exit, load_settings_or_exit
    from rolesync.config import get_roles_file, get_settings_path
    from rolesync.errors import FetchError

    settings = load_settings_or_exit()

    table = Table(title="rolesync Status")
    table.add_column("Check", style="cyan")
    table.add_column("Value")
    table.add_column("Status")

    settings_path = get_settings_path()
    table.add_row(
        "Settings",
        escape(str(settings_path)),
        "[green]Found[/green]" if settings_path.exists() else "[dim]Defaults[/dim]",
    )
    roles_file = get_roles_file()
    table.add_row(
        "Role file",
        escape(str(roles_file)),
        "[green]Found[/green]" if roles_file.exists() else "[dim]Not created yet[/dim]",
    )

    pm_path = shutil.which(settings.package_manager)
    table.add_row(
        "Package manager",
        escape(settings.package_manager),
        "[green]OK[/green]" if pm_path else "[red]Not found on PATH[/red]",
    )

    if is_root():
        privilege_status = "[green]Running as root[/green]"
    elif settings.privilege == "none":
        privilege_status = "[yellow]Escalation disabled[/yellow]"
    elif shutil.which("sudo"):
        privilege_status = "[green]sudo available[/green]"
    else:
        privilege_status = "[red]sudo not found[/red]"
    table.add_row("Privileges", escape(settings.privilege), privilege_status)

    provider = create_provider_or_exit(settings)
    try:
        count = len(provider.list_roles())
        provider_status = f"[green]Reachable[/green] ({count} role(s))"
    except FetchError as e:
        provider_status = f"[red]{escape(str(e))}[/red]"
    table.add_row("Provider", escape(settings.provider), provider_status)

    console.print(table)
