"""Browse the roles a provider offers, with or without their tools."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rolesync.errors import FetchError
from rolesync.resolver import DEFAULT_MAX_WORKERS, resolve_role

if TYPE_CHECKING:
    from rolesync.providers.base import ToolListProvider


@dataclass
class RoleListing:
    role: str
    tools: list[str]
    error: str | None = None


def list_available_roles(provider: ToolListProvider) -> list[str]:
    return provider.list_roles()


def _describe(role: str, provider: ToolListProvider) -> RoleListing:
    try:
        return RoleListing(role=role, tools=sorted(resolve_role(role, provider)))
    except FetchError as e:
        return RoleListing(role=role, tools=[], error=str(e))


def describe_roles(
    provider: ToolListProvider,
    roles: list[str] | None = None,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[RoleListing]:
    """Resolve each role's tools for display.

    Unlike synchronization, a role that cannot be fetched is reported in its
    listing and the others are still shown.
    """
    if roles is None:
        roles = list_available_roles(provider)
    if not roles:
        return []
    with ThreadPoolExecutor(max_workers=min(len(roles), max_workers)) as pool:
        return list(pool.map(lambda role: _describe(role, provider), roles))
