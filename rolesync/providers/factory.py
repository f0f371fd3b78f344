"""Select a tool list provider from settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rolesync.errors import ConfigStoreError

if TYPE_CHECKING:
    from rolesync.config import Settings
    from rolesync.providers.base import ToolListProvider


def create_provider(settings: Settings) -> ToolListProvider:
    """Create the provider named by ``settings.provider``."""
    if settings.provider == "registry":
        from rolesync.providers.registry import RegistryRoleProvider

        if not settings.registry_url:
            raise ConfigStoreError(
                "provider 'registry' needs 'registry_url' (config.yaml or ROLESYNC_REGISTRY_URL)"
            )
        return RegistryRoleProvider(settings.registry_url, timeout=settings.timeout_seconds)

    from rolesync.providers.github import GitHubRoleProvider

    return GitHubRoleProvider(settings.base_url, timeout=settings.timeout_seconds)
