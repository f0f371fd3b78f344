"""Package operation executor: apply install/uninstall sets through pacman."""

from __future__ import annotations

import subprocess
from collections.abc import Iterable
from enum import StrEnum

from rolesync._log import get_logger
from rolesync._privilege import escalation_prefix
from rolesync.errors import ExecutorError

logger = get_logger("executor")


class Mode(StrEnum):
    INSTALL = "install"
    UNINSTALL = "uninstall"


# Bulk install refreshes the sync databases once; per-package retries skip it.
_BULK_ARGS = {
    Mode.INSTALL: ["-Syu", "--noconfirm", "--needed"],
    Mode.UNINSTALL: ["-Rns", "--noconfirm"],
}
_SINGLE_ARGS = {
    Mode.INSTALL: ["-S", "--noconfirm", "--needed"],
    Mode.UNINSTALL: ["-Rns", "--noconfirm"],
}
# --needed keeps the install reason of present packages; role packages must be
# explicit or -Rns can remove them as orphaned dependencies.
_MARK_EXPLICIT_ARGS = ["-D", "--asexplicit"]


class PacmanExecutor:
    """Run pacman with escalation, one blocking process at a time.

    A failing bulk transaction is retried package by package so a single bad
    name does not block the rest. Uninstalling a package that is not
    installed is a no-op.
    """

    def __init__(self, binary: str = "pacman", *, privilege: str = "sudo") -> None:
        self.binary = binary
        self.privilege = privilege

    def _run(self, args: list[str]) -> int:
        cmd = [*escalation_prefix(self.privilege), self.binary, *args]
        logger.debug("Running: %s", " ".join(cmd))
        try:
            return subprocess.run(cmd, check=False).returncode
        except OSError as e:
            raise ExecutorError(f"Cannot run {cmd[0]}: {e}") from e

    def is_installed(self, package: str) -> bool:
        try:
            result = subprocess.run(
                [self.binary, "-Q", package], capture_output=True, check=False
            )
        except OSError as e:
            raise ExecutorError(f"Cannot run {self.binary}: {e}") from e
        return result.returncode == 0

    def apply(self, mode: Mode, packages: Iterable[str]) -> None:
        """Install or uninstall *packages*. An empty set spawns no process."""
        pkgs = sorted(set(packages))
        if mode is Mode.UNINSTALL:
            present = [p for p in pkgs if self.is_installed(p)]
            for pkg in sorted(set(pkgs) - set(present)):
                logger.info("'%s' is not installed, skipping uninstall", pkg)
            pkgs = present
        if not pkgs:
            logger.debug("Nothing to %s", mode)
            return

        returncode = self._run([*_BULK_ARGS[mode], *pkgs])
        if returncode != 0:
            logger.warning(
                "Bulk %s failed (exit code %d), retrying %d package(s) individually",
                mode,
                returncode,
                len(pkgs),
            )
            failed = [pkg for pkg in pkgs if self._run([*_SINGLE_ARGS[mode], pkg]) != 0]
            if failed:
                raise ExecutorError(
                    f"{self.binary} {mode} failed for: {', '.join(failed)}",
                    mode=str(mode),
                    failed=failed,
                )

        if mode is Mode.INSTALL:
            self._mark_explicit(pkgs)

    def _mark_explicit(self, pkgs: list[str]) -> None:
        returncode = self._run([*_MARK_EXPLICIT_ARGS, *pkgs])
        if returncode != 0:
            raise ExecutorError(
                f"{self.binary} could not mark packages as explicitly installed "
                f"(exit code {returncode})",
                mode=str(Mode.INSTALL),
                failed=pkgs,
            )
