"""Role resolver: map role ids to normalized package sets through a provider."""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rolesync._log import get_logger
from rolesync.errors import FetchError
from rolesync.normalize import normalize_tool_name

if TYPE_CHECKING:
    from rolesync.providers.base import ToolListProvider

logger = get_logger("resolver")

DEFAULT_MAX_WORKERS = 8


@dataclass(frozen=True)
class RoleResolution:
    """Packages required by each resolved role. Request-scoped, never persisted."""

    by_role: dict[str, frozenset[str]] = field(default_factory=dict)

    @property
    def packages(self) -> frozenset[str]:
        return self.packages_for(self.by_role)

    @property
    def empty_roles(self) -> tuple[str, ...]:
        return tuple(role for role, pkgs in self.by_role.items() if not pkgs)

    def packages_for(self, roles: Iterable[str]) -> frozenset[str]:
        """Union of the package sets of *roles*. Every role must have been resolved."""
        result: set[str] = set()
        for role in roles:
            result |= self.by_role[role]
        return frozenset(result)


def resolve_role(role: str, provider: ToolListProvider) -> frozenset[str]:
    """Fetch one role and normalize its tool names, dropping empty lines."""
    names = (normalize_tool_name(raw) for raw in provider.fetch_tools(role))
    packages = frozenset(name for name in names if name)
    logger.debug("Role '%s' resolved to %d package(s)", role, len(packages))
    return packages


def resolve_roles(
    roles: Iterable[str],
    provider: ToolListProvider,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> RoleResolution:
    """Resolve every role, fetching each one exactly once.

    Fetches run concurrently. Resolution is all-or-nothing: if any role
    fails, :class:`FetchError` is raised for the first failing role in input
    order and no partial result is returned.
    """
    unique = list(dict.fromkeys(roles))
    if not unique:
        return RoleResolution()

    resolved: dict[str, frozenset[str]] = {}
    errors: dict[str, FetchError] = {}

    if len(unique) == 1:
        resolved[unique[0]] = resolve_role(unique[0], provider)
    else:
        with ThreadPoolExecutor(
            max_workers=min(len(unique), max_workers), thread_name_prefix="role_fetch"
        ) as pool:
            futures = {pool.submit(resolve_role, role, provider): role for role in unique}
            for future in as_completed(futures):
                role = futures[future]
                try:
                    resolved[role] = future.result()
                except FetchError as e:
                    errors[role] = e

    if errors:
        failed = [role for role in unique if role in errors]
        for role in failed[1:]:
            logger.debug("Also failed: %s", errors[role])
        first = errors[failed[0]]
        if len(failed) > 1:
            raise FetchError(
                first.role, f"{first.detail} (and {len(failed) - 1} more role(s) failed)"
            ) from first
        raise first

    resolution = RoleResolution({role: resolved[role] for role in unique})
    for role in resolution.empty_roles:
        logger.warning(
            "Role '%s' lists no tools; the role file may be malformed or renamed", role
        )
    return resolution
