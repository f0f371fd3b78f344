"""Shared test fixtures and fakes."""

from __future__ import annotations

import threading
from collections.abc import Iterable

import pytest

from rolesync.config import get_home_dir
from rolesync.errors import ExecutorError, FetchError
from rolesync.executor import Mode


class FakeProvider:
    """In-memory tool list provider recording every fetch."""

    name = "fake"

    def __init__(
        self,
        roles: dict[str, list[str]] | None = None,
        *,
        failing: Iterable[str] = (),
    ) -> None:
        self.roles = roles or {}
        self.failing = set(failing)
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def fetch_tools(self, role: str) -> list[str]:
        with self._lock:
            self.calls.append(role)
        if role in self.failing:
            raise FetchError(role, "connection reset")
        if role not in self.roles:
            raise FetchError(role, "not found")
        return list(self.roles[role])

    def list_roles(self) -> list[str]:
        return list(self.roles)


class FakeExecutor:
    """Package executor recording applied operations."""

    def __init__(self, *, fail_on: Mode | None = None) -> None:
        self.fail_on = fail_on
        self.calls: list[tuple[Mode, frozenset[str]]] = []

    def apply(self, mode: Mode, packages: Iterable[str]) -> None:
        pkgs = frozenset(packages)
        self.calls.append((mode, pkgs))
        if mode is self.fail_on:
            raise ExecutorError(f"pacman {mode} failed", mode=str(mode), failed=sorted(pkgs))


@pytest.fixture(autouse=True)
def rolesync_home(tmp_path, monkeypatch):
    """Point ROLESYNC_HOME at a temp dir and clear env overrides."""
    home = tmp_path / "roles-home"
    monkeypatch.setenv("ROLESYNC_HOME", str(home))
    for var in ("ROLESYNC_PROVIDER", "ROLESYNC_BASE_URL", "ROLESYNC_REGISTRY_URL", "GITHUB_TOKEN"):
        monkeypatch.delenv(var, raising=False)
    get_home_dir.cache_clear()
    yield home
    get_home_dir.cache_clear()
