"""Command orchestrator: add, remove and set-exact with safe persistence order.

Order is always load, resolve and plan, execute, persist. The role file is
only written after the package manager succeeded, so after any failure it
still describes what is installed and the same command can be retried.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, Protocol

from rolesync._log import get_logger
from rolesync.errors import ConfigStoreError
from rolesync.executor import Mode
from rolesync.models import Operation, RoleSet
from rolesync.planner import SyncPlan
from rolesync.planner import plan as plan_operation
from rolesync.resolver import DEFAULT_MAX_WORKERS, resolve_roles

if TYPE_CHECKING:
    from rolesync.providers.base import ToolListProvider
    from rolesync.store import RoleSetStore

logger = get_logger("orchestrator")


class PackageExecutor(Protocol):
    def apply(self, mode: Mode, packages: Iterable[str]) -> None: ...


@dataclass
class SyncOutcome:
    plan: SyncPlan
    previous_roles: RoleSet
    installed: frozenset[str] = frozenset()
    uninstalled: frozenset[str] = frozenset()
    persisted: bool = False
    persist_warning: str | None = None
    dry_run: bool = False


class Orchestrator:
    def __init__(
        self,
        store: RoleSetStore,
        provider: ToolListProvider,
        executor: PackageExecutor,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self.store = store
        self.provider = provider
        self.executor = executor
        self.max_workers = max_workers

    def plan(self, operation: Operation, roles: Iterable[str]) -> tuple[RoleSet, SyncPlan]:
        """Read the current role set and plan *operation* against it."""
        current = self.store.read()
        resolve = partial(resolve_roles, provider=self.provider, max_workers=self.max_workers)
        return current, plan_operation(operation, current, roles, resolve)

    def run(
        self,
        operation: Operation,
        roles: Iterable[str],
        *,
        dry_run: bool = False,
    ) -> SyncOutcome:
        """Plan, apply and persist one command.

        Raises :class:`FetchError`, :class:`ExecutorError` or a load-stage
        :class:`ConfigStoreError` with the store untouched. A failed final
        write is reported as ``persist_warning`` instead: the packages already
        match the new role set and re-running the command reconciles the file.
        """
        current, sync_plan = self.plan(operation, roles)
        outcome = SyncOutcome(plan=sync_plan, previous_roles=current, dry_run=dry_run)
        logger.debug(
            "%s plan: install=%d refresh=%d uninstall=%d",
            operation,
            len(sync_plan.to_install),
            len(sync_plan.to_refresh),
            len(sync_plan.to_uninstall),
        )
        if dry_run:
            return outcome

        if sync_plan.install_set:
            self.executor.apply(Mode.INSTALL, sync_plan.install_set)
            outcome.installed = sync_plan.install_set
        if sync_plan.to_uninstall:
            self.executor.apply(Mode.UNINSTALL, sync_plan.to_uninstall)
            outcome.uninstalled = sync_plan.to_uninstall

        try:
            self.store.write(sync_plan.new_roles)
        except ConfigStoreError as e:
            logger.warning("Packages were applied but the role file was not updated: %s", e)
            outcome.persist_warning = str(e)
        else:
            outcome.persisted = True
        return outcome

    def add(self, roles: Iterable[str], *, dry_run: bool = False) -> SyncOutcome:
        return self.run(Operation.ADD, roles, dry_run=dry_run)

    def remove(self, roles: Iterable[str], *, dry_run: bool = False) -> SyncOutcome:
        return self.run(Operation.REMOVE, roles, dry_run=dry_run)

    def set_exact(self, roles: Iterable[str], *, dry_run: bool = False) -> SyncOutcome:
        return self.run(Operation.SET, roles, dry_run=dry_run)
