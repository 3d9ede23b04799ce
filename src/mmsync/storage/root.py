"""Module defining the storage root and the names of the files it contains."""

from __future__ import annotations

import os
import random
import time
from pathlib import Path
from typing import Final

from ..errors import InvalidConfigurationError

# Names of the files inside the storage root
CHECKSUM_FILENAME: Final[str] = "local.md5"
LIBRARY_FILENAME: Final[str] = "library.mmdb"
DOTLOCK_FILENAME: Final[str] = ".lock"

# Work directories are named f"{WORK_DIR_PREFIX}{unix_seconds}-{random}"
WORK_DIR_PREFIX: Final[str] = "tmp-dl-"
WORK_DIR_GLOB: Final[str] = WORK_DIR_PREFIX + "*"

# Name of the archive inside a work directory
ARCHIVE_FILENAME: Final[str] = "tmp.tar.gz"

# Extension of the database file we look for after extraction
LIBRARY_SUFFIX: Final[str] = ".mmdb"


class StorageRoot:
    """
    Writable directory containing the local copy of the library.

    The path is validated and resolved once, when constructing the
    instance, and all the other paths are derived from it.
    """

    def __init__(self, directory: str | Path):
        """
        Validate and resolve the given directory.

        Raises:
            InvalidConfigurationError: if the directory is empty, does not
                exist, is not a directory or is not writable.
        """
        if not str(directory):
            raise InvalidConfigurationError("The given storage directory is empty")
        path = Path(directory)
        if not path.exists():
            raise InvalidConfigurationError(f"The given storage directory: {path} does not exist!")
        if not path.is_dir():
            raise InvalidConfigurationError(f"The given storage directory: {path} is no directory!")
        if not os.access(path, os.W_OK):
            raise InvalidConfigurationError(f"The given storage directory: {path} is not writable!")
        self.path = path.resolve()

    def __repr__(self) -> str:
        return f"StorageRoot({str(self.path)!r})"

    def checksum_file_path(self) -> Path:
        """Returns the path to the `local.md5` file."""
        return self.path / CHECKSUM_FILENAME

    def library_file_path(self) -> Path:
        """Returns the path to the `library.mmdb` file."""
        return self.path / LIBRARY_FILENAME

    def lock_file_path(self) -> Path:
        """Returns the path to the file used to serialize syncs."""
        return self.path / DOTLOCK_FILENAME

    def new_work_dir_path(self) -> Path:
        """Returns a fresh path for a work directory, which is not created."""
        name = f"{WORK_DIR_PREFIX}{int(time.time())}-{random.randint(0, 99999)}"
        return self.path / name


def storage_dir_or_default(storage_dir: str | Path | None) -> Path:
    """
    Return storage_dir as a Path if not None. Otherwise return the
    default storage directory (i.e., `./.mmsync`).
    """
    return Path.cwd() / ".mmsync" if storage_dir is None else Path(storage_dir)
