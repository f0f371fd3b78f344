"""Error hierarchy for role synchronization.

Every error names the stage it failed in so the operator knows what a retry
will repeat.
"""

from __future__ import annotations

from enum import StrEnum


class Stage(StrEnum):
    LOAD = "load"
    RESOLVE = "resolve"
    PLAN = "plan"
    EXECUTE = "execute"
    PERSIST = "persist"


class RoleSyncError(Exception):
    """Base error for rolesync operations."""

    stage: Stage = Stage.PLAN

    def __init__(self, message: str, *, stage: Stage | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class PlanError(RoleSyncError):
    """The requested command cannot be planned."""

    stage = Stage.PLAN


class FetchError(RoleSyncError):
    """A role's tool list could not be fetched or parsed."""

    stage = Stage.RESOLVE

    def __init__(self, role: str, message: str) -> None:
        self.role = role
        self.detail = message
        super().__init__(f"Role '{role}': {message}")


class ConfigStoreError(RoleSyncError):
    """Reading or writing the role set store (or settings) failed."""

    stage = Stage.LOAD


class ExecutorError(RoleSyncError):
    """The package manager failed or privilege escalation was denied."""

    stage = Stage.EXECUTE

    def __init__(self, message: str, *, mode: str = "", failed: list[str] | None = None) -> None:
        self.mode = mode
        self.failed = failed or []
        super().__init__(message)
