"""Synchronization planner: turn a role-set change into package operations.

The planner never touches the network. It receives a ``resolve`` callable
that maps a set of roles to a :class:`RoleResolution` and is called once per
plan, over every role the plan needs, so all fetches fan out together.

Remove is the delicate case: a package is uninstalled only when a removed
role required it and no surviving role does.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from rolesync.errors import PlanError
from rolesync.models import Operation, RoleSet
from rolesync.resolver import RoleResolution

Resolve = Callable[[RoleSet], RoleResolution]


@dataclass(frozen=True)
class SyncPlan:
    """Package operations and resulting role set for one command.

    ``to_install`` holds packages the new role set needs and the current one
    did not. ``to_refresh`` holds packages both need; ``add`` re-applies them
    so a changed or partially installed role converges. The executor installs
    :attr:`install_set`.
    """

    operation: Operation
    new_roles: RoleSet
    to_install: frozenset[str] = frozenset()
    to_refresh: frozenset[str] = frozenset()
    to_uninstall: frozenset[str] = frozenset()
    empty_roles: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        overlap = (self.to_install | self.to_refresh) & self.to_uninstall
        if overlap:
            raise PlanError(f"Packages both installed and uninstalled: {sorted(overlap)}")

    @property
    def install_set(self) -> frozenset[str]:
        return self.to_install | self.to_refresh

    @property
    def is_noop(self) -> bool:
        return not self.install_set and not self.to_uninstall


def plan_add(current: RoleSet, roles: Iterable[str], resolve: Resolve) -> SyncPlan:
    """Add roles and (re)install every package of the resulting role set."""
    new_roles = current.union(roles)
    resolution = resolve(new_roles)
    before = resolution.packages_for(current)
    after = resolution.packages_for(new_roles)
    return SyncPlan(
        operation=Operation.ADD,
        new_roles=new_roles,
        to_install=after - before,
        to_refresh=after & before,
        empty_roles=resolution.empty_roles,
    )


def plan_remove(current: RoleSet, roles: Iterable[str], resolve: Resolve) -> SyncPlan:
    """Drop roles and uninstall packages no surviving role still requires."""
    requested = RoleSet(roles)
    removed = current.intersection(requested)
    new_roles = current.difference(requested)
    if not removed:
        return SyncPlan(operation=Operation.REMOVE, new_roles=new_roles)

    resolution = resolve(current)
    kept = resolution.packages_for(new_roles)
    return SyncPlan(
        operation=Operation.REMOVE,
        new_roles=new_roles,
        to_uninstall=resolution.packages_for(removed) - kept,
        empty_roles=resolution.empty_roles,
    )


def plan_set_exact(current: RoleSet, roles: Iterable[str], resolve: Resolve) -> SyncPlan:
    """Replace the role set, installing and uninstalling only the difference."""
    new_roles = RoleSet(roles)
    resolution = resolve(current.union(new_roles))
    before = resolution.packages_for(current)
    after = resolution.packages_for(new_roles)
    return SyncPlan(
        operation=Operation.SET,
        new_roles=new_roles,
        to_install=after - before,
        to_uninstall=before - after,
        empty_roles=resolution.empty_roles,
    )


_PLANNERS = {
    Operation.ADD: plan_add,
    Operation.REMOVE: plan_remove,
    Operation.SET: plan_set_exact,
}


def plan(
    operation: Operation,
    current: RoleSet,
    roles: Iterable[str],
    resolve: Resolve,
) -> SyncPlan:
    """Dispatch to the planner for *operation*."""
    requested = RoleSet(roles)
    if not requested:
        raise PlanError(f"'{operation}' needs at least one role name")
    return _PLANNERS[operation](current, requested, resolve)
