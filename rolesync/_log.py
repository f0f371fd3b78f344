"""Centralized logging for rolesync."""

from __future__ import annotations

import logging
import sys
import threading

_lock = threading.Lock()
_setup_done = False


class _Formatter(logging.Formatter):
    """Format log records as ``[tag] message``, stripping the ``rolesync.`` prefix."""

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith("rolesync."):
            name = name[len("rolesync.") :]
        record.msg = f"[{name}] {record.msg}"
        return super().format(record)


def setup_logging(verbose: bool = False) -> None:
    """Configure the ``rolesync`` root logger.

    The first call attaches a ``StreamHandler(sys.stderr)``. Later calls only
    adjust the level, so ``--verbose`` still takes effect after a module has
    already asked for a logger.
    """
    global _setup_done
    with _lock:
        logger = logging.getLogger("rolesync")
        if verbose:
            logger.setLevel(logging.DEBUG)
        if _setup_done:
            return
        if not verbose:
            logger.setLevel(logging.WARNING)
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_Formatter())
        logger.addHandler(handler)
        logger.propagate = False
        _setup_done = True


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(f"rolesync.{name}")``, setting up logging lazily."""
    setup_logging()
    return logging.getLogger(f"rolesync.{name}")
