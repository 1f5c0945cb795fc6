"""
Single-file-per-artifact storage under one cache directory.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredBlob:
    """Raw bytes of a stored artifact and the creation time of its file."""

    data: bytes
    created_at: float


def _created_at(stat: os.stat_result) -> float:
    # Birth time is only exposed on some platforms. Everywhere else the
    # modification time is equivalent, since replace() always recreates the file.
    return getattr(stat, "st_birthtime", stat.st_mtime)


class DiskStore:
    """
    Maps logical artifact names to files inside a cache directory.

    The directory is created lazily on the first write.
    """

    def __init__(self, cache_dir: Path):
        self.cache_dir = cache_dir

    def path(self, name: str) -> Path:
        return self.cache_dir / name

    def read(self, name: str) -> StoredBlob | None:
        """
        Reads an artifact.

        Returns None if nothing has been stored under `name` yet. Any other
        OSError propagates to the caller.
        """
        try:
            with open(self.path(name), "rb") as f:
                stat = os.fstat(f.fileno())
                data = f.read()
        except FileNotFoundError:
            return None
        return StoredBlob(data=data, created_at=_created_at(stat))

    def replace(self, name: str, data: bytes) -> None:
        """
        Writes an artifact, destroying any previous file first.

        Deleting before creating refreshes the file's creation time even on
        platforms where truncation would keep it.
        """
        path = self.path(name)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        path.unlink(missing_ok=True)
        with open(path, "wb") as f:
            f.write(data)

    def purge(self, name: str) -> bool:
        """
        Best-effort delete. Never raises.

        Returns False if the file could not be removed; callers are free to
        ignore the result.
        """
        path = self.path(name)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            log.warning(f"Failed to clean up cache file {path}: {e}")
            return False
        log.debug(f"Removed cache file {path}")
        return True
