"""Role set store: the persisted list of active roles (``roles.cnf``)."""

from __future__ import annotations

from pathlib import Path

from rolesync._log import get_logger
from rolesync._paths import atomic_write_text, ensure_private_dir
from rolesync.errors import ConfigStoreError, Stage
from rolesync.models import RoleSet

logger = get_logger("store")


class RoleSetStore:
    """One role id per line. Blank lines are ignored, duplicates collapse on read."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> RoleSet:
        """Return the persisted role set, or an empty one if the file is missing."""
        if not self.path.exists():
            logger.debug("No role file at %s, starting empty", self.path)
            return RoleSet()
        try:
            text = self.path.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigStoreError(f"Cannot read {self.path}: {e}", stage=Stage.LOAD) from e
        return RoleSet(text.splitlines())

    def write(self, roles: RoleSet) -> None:
        """Replace the file with *roles*, one per line."""
        body = "".join(f"{role}\n" for role in roles)
        try:
            ensure_private_dir(self.path.parent)
            atomic_write_text(self.path, body)
        except OSError as e:
            raise ConfigStoreError(f"Cannot write {self.path}: {e}", stage=Stage.PERSIST) from e
        logger.debug("Wrote %d role(s) to %s", len(roles), self.path)
