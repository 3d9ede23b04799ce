"""Extraction of the downloaded library archive."""

from __future__ import annotations

import tarfile
import zlib
from pathlib import Path
from typing import Protocol

from .errors import DownloadFailedError


class ArchiveExtractor(Protocol):
    """
    Extracts an archive into a target directory, preserving its tree.

    Implementations raise DownloadFailedError when they cannot extract.
    """

    def extract(self, archive: Path, target_dir: Path) -> None: ...


class TarGzExtractor:
    """
    ArchiveExtractor for gzip-compressed tarballs.

    Members are extracted using the "data" filter, which refuses absolute
    paths, members escaping the target directory and special files.
    """

    def extract(self, archive: Path, target_dir: Path) -> None:
        try:
            with tarfile.open(archive, mode="r:gz") as tar:
                tar.extractall(target_dir, filter="data")
        except (tarfile.TarError, EOFError, zlib.error, OSError) as exc:
            raise DownloadFailedError(f"Could not extract {archive.name}: {exc}") from exc
