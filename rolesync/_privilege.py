"""Root detection and privilege-escalation prefix for package manager calls."""

from __future__ import annotations

import os
import shutil

from rolesync.errors import ExecutorError


def is_root() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return geteuid is not None and geteuid() == 0


def escalation_prefix(privilege: str) -> list[str]:
    """Return the argv prefix needed to run a privileged command.

    Empty when already root or when *privilege* is ``"none"``.
    """
    if privilege == "none" or is_root():
        return []
    sudo = shutil.which("sudo")
    if sudo is None:
        raise ExecutorError("Root privileges are required and 'sudo' was not found on PATH")
    return [sudo]
