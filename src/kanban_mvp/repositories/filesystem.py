"""Filesystem-backed key-value slot."""

from __future__ import annotations

import logging
import os
import re
import tempfile
from pathlib import Path

from ..errors import StoreReadError, StoreWriteError

logger = logging.getLogger(__name__)


def key_to_filename(key: str) -> str:
    """
    Map a slot key to a portable filename.

    Example: "kanban_mvp:v1" -> "kanban_mvp-v1.json"
    """
    safe = re.sub(r"[^A-Za-z0-9_.\-]", "-", key).strip("-.")
    return f"{safe or 'slot'}.json"


class FilesystemSlot:
    """
    Slot storage backed by files in a data directory.

    Each key is stored as its own JSON file. Writes go to a temporary file
    in the same directory that then replaces the target, so a failed write
    never leaves a truncated document behind.
    """

    def __init__(self, data_dir: Path) -> None:
        """
        Initialize slot storage.

        Args:
            data_dir: Directory holding the slot files (e.g., .kanban/)
        """
        self.data_dir = data_dir

    def path_for(self, key: str) -> Path:
        """Get the file path used for a key."""
        return self.data_dir / key_to_filename(key)

    def read(self, key: str) -> str | None:
        """Read a slot file, None if it does not exist."""
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read slot %s: %s", path, e)
            raise StoreReadError(f"Cannot read {path}: {e}") from e

    def write(self, key: str, value: str) -> None:
        """Atomically replace a slot file."""
        path = self.path_for(key)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.data_dir, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.warning("Cannot write slot %s: %s", path, e)
            raise StoreWriteError(f"Cannot write {path}: {e}") from e
