"""Shared CLI helpers: console, settings, orchestrator wiring, error exits."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer
from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from rolesync.config import Settings
    from rolesync.errors import RoleSyncError
    from rolesync.orchestrator import Orchestrator
    from rolesync.providers.base import ToolListProvider

console = Console()


def exit_with_error(error: RoleSyncError) -> NoReturn:
    console.print(f"[red]Error:[/red] ({error.stage}) {escape(str(error))}")
    raise typer.Exit(1)


def load_settings_or_exit() -> Settings:
    from rolesync.config import load_settings
    from rolesync.errors import ConfigStoreError

    try:
        return load_settings()
    except ConfigStoreError as e:
        exit_with_error(e)


def create_provider_or_exit(settings: Settings) -> ToolListProvider:
    from rolesync.errors import ConfigStoreError
    from rolesync.providers import create_provider

    try:
        return create_provider(settings)
    except ConfigStoreError as e:
        exit_with_error(e)


def build_orchestrator(settings: Settings) -> Orchestrator:
    from rolesync.config import get_roles_file
    from rolesync.executor import PacmanExecutor
    from rolesync.orchestrator import Orchestrator
    from rolesync.store import RoleSetStore

    return Orchestrator(
        RoleSetStore(get_roles_file()),
        create_provider_or_exit(settings),
        PacmanExecutor(settings.package_manager, privilege=settings.privilege),
        max_workers=settings.max_workers,
    )


def format_packages(packages: frozenset[str] | set[str]) -> str:
    return ", ".join(sorted(packages)) if packages else "(none)"
