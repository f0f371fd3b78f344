"""Secure-path helpers for the ~/.roles directory."""

from __future__ import annotations

import sys
from pathlib import Path


def ensure_private_dir(path: Path) -> None:
    """Create (or tighten) a directory to mode 0o700."""
    path.mkdir(parents=True, exist_ok=True, mode=0o700)
    if sys.platform != "win32":
        path.chmod(0o700)


def atomic_write_text(path: Path, text: str) -> None:
    """Write *text* to *path* through a sibling temp file and ``replace``."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        tmp.write_text(text)
        tmp.replace(path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
