"""Module implementing removal of stale work directories."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .root import WORK_DIR_GLOB, StorageRoot

log = logging.getLogger("storage/sweep")


class RecoverySweeper:
    """
    Removes the work directories left inside the storage root.

    Work directories belong to in-flight or interrupted syncs. The sweep
    is best-effort: failures are logged and the sweep continues with the
    remaining entries.
    """

    def __init__(self, root: StorageRoot):
        self.root = root

    def sweep(self) -> None:
        """Remove all the work directories directly under the storage root."""
        for entry in sorted(self.root.path.glob(WORK_DIR_GLOB)):
            if entry.is_dir() and not entry.is_symlink():
                log.debug("removing %s... start", entry)
                _remove_tree(entry)
                log.debug("removing %s... ok", entry)


def _remove_tree(directory: Path) -> None:
    # os.walk(topdown=False) yields children before their parent
    for dirpath, dirnames, filenames in os.walk(directory, topdown=False):
        base = Path(dirpath)
        for name in filenames:
            _remove(base / name, os.unlink)
        for name in dirnames:
            # os.walk lists symlinks to directories among dirnames
            child = base / name
            _remove(child, os.unlink if child.is_symlink() else os.rmdir)
    _remove(directory, os.rmdir)


def _remove(path: Path, remove) -> None:
    try:
        remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        log.warning("removing %s... failure: %s", path, exc)
