"""Centralized path and settings configuration for rolesync.

Respects the ``ROLESYNC_HOME`` env var and falls back to ``~/.roles``.
Settings live in ``<home>/config.yaml``; a few env vars override them.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/jakubGodula/cyber-toolkit/main/roles/"

_ENV_OVERRIDES = {
    "ROLESYNC_PROVIDER": "provider",
    "ROLESYNC_BASE_URL": "base_url",
    "ROLESYNC_REGISTRY_URL": "registry_url",
}


class Settings(BaseModel):
    provider: Literal["github", "registry"] = "github"
    base_url: str = DEFAULT_BASE_URL
    registry_url: str = ""
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_workers: int = Field(default=8, ge=1)
    package_manager: str = "pacman"
    privilege: Literal["sudo", "none"] = "sudo"


@lru_cache(maxsize=1)
def get_home_dir() -> Path:
    """Return the rolesync data directory.

    Resolution order:
    1. ``ROLESYNC_HOME`` environment variable
    2. ``~/.roles``
    """
    env = os.environ.get("ROLESYNC_HOME")
    if env:
        return Path(env)
    return Path.home() / ".roles"


def get_roles_file() -> Path:
    return get_home_dir() / "roles.cnf"


def get_settings_path() -> Path:
    return get_home_dir() / "config.yaml"


def _read_settings_file(path: Path) -> dict:
    """Parse the settings file into a mapping; empty or missing means defaults."""
    import yaml

    from rolesync.errors import ConfigStoreError

    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text())
    except OSError as e:
        raise ConfigStoreError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigStoreError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigStoreError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from YAML (defaults when missing), then apply env overrides."""
    from pydantic import ValidationError

    from rolesync.errors import ConfigStoreError

    path = path or get_settings_path()
    try:
        settings = Settings.model_validate(_read_settings_file(path))
    except ValidationError as e:
        raise ConfigStoreError(f"Validation failed for {path}:\n{e}") from e

    overrides = {
        field: os.environ[env] for env, field in _ENV_OVERRIDES.items() if os.environ.get(env)
    }
    if overrides:
        try:
            settings = Settings.model_validate({**settings.model_dump(), **overrides})
        except ValidationError as e:
            raise ConfigStoreError(f"Invalid environment override:\n{e}") from e
    return settings
