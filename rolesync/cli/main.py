"""Typer CLI for rolesync: wiring hub for command modules."""

from __future__ import annotations

from typing import Annotated

import typer

from rolesync.cli._helpers import console

app = typer.Typer(
    name="rolesync",
    help="Keep installed tools in sync with a set of remote roles.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        from rolesync import __version__

        console.print(f"rolesync {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging"),
    ] = False,
) -> None:
    """rolesync: keep installed tools in sync with a set of remote roles."""
    from rolesync._log import setup_logging

    setup_logging(verbose=verbose)


from rolesync.cli.doctor_cmd import doctor  # noqa: E402
from rolesync.cli.roles_cmd import list_roles  # noqa: E402
from rolesync.cli.sync_cmd import current, sync  # noqa: E402

app.command()(sync)
app.command()(current)
app.command("list")(list_roles)
app.command()(doctor)


def app_entry() -> None:
    """Entry point for the CLI."""
    app()
