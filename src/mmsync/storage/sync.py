"""Module implementing the SyncEngine type."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import requests
from filelock import FileLock

from ..archive import ArchiveExtractor, TarGzExtractor
from ..config import SyncConfig, prepare_url
from ..errors import DownloadFailedError
from ..http import HTTPClient, RequestsHTTPClient
from .checksum import ChecksumOracle
from .detect import ChangeDetector
from .root import ARCHIVE_FILENAME, CHECKSUM_FILENAME, LIBRARY_SUFFIX, StorageRoot
from .sweep import RecoverySweeper

log = logging.getLogger("storage/sync")

# Attempts at picking an unused work directory name
_WORK_DIR_ATTEMPTS = 8


class SyncEngine:
    """
    Component keeping the local library in sync with the remote one.

    A sync downloads the remote archive into a fresh work directory,
    extracts it, renames the extracted database over the local library
    and records the checksum of the remote archive. A failing step
    raises DownloadFailedError and leaves the previous library and
    checksum untouched; the work directory it leaves behind is removed
    by the sweep at the start of the next sync.
    """

    def __init__(
        self,
        *,
        storage_dir: str | Path | StorageRoot,
        license_key: str,
        http: HTTPClient | None = None,
        extractor: ArchiveExtractor | None = None,
        config: SyncConfig | None = None,
    ):
        """
        Initialize the engine.

        Parameters:
            storage_dir: directory containing the local library, which
                must exist and be writable.
            license_key: license key used to fill the URL templates.
            http: client used to fetch files (default: RequestsHTTPClient).
            extractor: archive extractor (default: TarGzExtractor).
            config: URL templates and timeouts (default: SyncConfig()).

        Raises:
            InvalidConfigurationError: if storage_dir is not usable.
        """
        if not isinstance(storage_dir, StorageRoot):
            storage_dir = StorageRoot(storage_dir)
        self.root = storage_dir
        self.license_key = license_key
        self.http = http if http is not None else RequestsHTTPClient()
        self.extractor = extractor if extractor is not None else TarGzExtractor()
        self.config = config if config is not None else SyncConfig()
        self.checksums = ChecksumOracle(
            root=self.root,
            license_key=license_key,
            http=self.http,
            config=self.config,
        )
        self.detector = ChangeDetector(self.checksums)
        self.sweeper = RecoverySweeper(self.root)

    def library_file_path(self) -> Path:
        """Returns the path to the local library."""
        return self.root.library_file_path()

    def is_download_required(self) -> bool:
        """Shortcut for ChangeDetector.is_download_required."""
        return self.detector.is_download_required()

    def sync_if_required(self) -> bool:
        """
        Run a sync only when there is no local copy or the remote changed.

        Returns:
            True if a sync was performed, False otherwise.

        Raises:
            DownloadFailedError: if checking for changes or syncing fails.
        """
        if not self.detector.is_download_required():
            log.info("library %s is up to date", self.root.library_file_path())
            return False
        self.run()
        return True

    def run(self) -> Path:
        """
        Unconditionally replace the local library with the remote one.

        Returns:
            The path to the local library.

        Raises:
            DownloadFailedError: if any step of the sync fails.
        """
        with FileLock(self.root.lock_file_path()):
            log.info("syncing %s... start", self.root)
            self.sweeper.sweep()
            checksum = self.checksums.foreign_checksum()
            work_dir = self._create_work_dir()
            archive = work_dir / ARCHIVE_FILENAME
            self._download_archive(archive)
            self._extract_archive(archive, work_dir)
            self._replace_library(self._locate_library(work_dir))
            self._persist_checksum(checksum, work_dir)
            self.sweeper.sweep()
            log.info("syncing %s... ok", self.root)
        return self.root.library_file_path()

    def _create_work_dir(self) -> Path:
        for _ in range(_WORK_DIR_ATTEMPTS):
            work_dir = self.root.new_work_dir_path()
            try:
                work_dir.mkdir()
            except FileExistsError:
                continue
            except OSError as exc:
                raise DownloadFailedError(
                    f'The temporary download directory: "{work_dir}" could not be created!'
                ) from exc
            return work_dir
        raise DownloadFailedError("Could not find an unused temporary download directory name")

    def _download_archive(self, archive: Path) -> None:
        url = prepare_url(self.config.library_url, self.license_key)
        log.info("fetching library archive... start")
        try:
            self.http.fetch_to_file(url, archive, timeout=self.config.library_timeout)
        except (requests.RequestException, OSError) as exc:
            log.warning("fetching library archive... failure: %s", exc)
            raise DownloadFailedError("Could not download the library file!") from exc
        log.info("fetching library archive... ok")

    def _extract_archive(self, archive: Path, work_dir: Path) -> None:
        log.info("extracting %s... start", archive.name)
        try:
            self.extractor.extract(archive, work_dir)
        except OSError as exc:
            raise DownloadFailedError(f"Could not extract {archive.name}") from exc
        log.info("extracting %s... ok", archive.name)

    def _locate_library(self, work_dir: Path) -> Path:
        # Archives wrap the database in a single versioned directory
        # (e.g., GeoLite2-City_20230101/GeoLite2-City.mmdb).
        candidates = sorted(p for p in work_dir.glob(f"*/*{LIBRARY_SUFFIX}") if p.is_file())
        if not candidates:
            raise DownloadFailedError(
                "Could not find the extracted library file to replace the local library!"
            )
        if len(candidates) > 1:
            names = ", ".join(str(p.relative_to(work_dir)) for p in candidates)
            raise DownloadFailedError(f"Found more than one extracted library file: {names}")
        return candidates[0]

    def _replace_library(self, source: Path) -> None:
        target = self.root.library_file_path()
        # Same filesystem, so the old library is replaced atomically
        try:
            os.replace(source, target)
        except OSError as exc:
            raise DownloadFailedError(
                "Error while moving downloaded library to local directory"
            ) from exc
        log.debug("replaced %s with %s", target, source)

    def _persist_checksum(self, checksum: str, work_dir: Path) -> None:
        tmp_file = work_dir / CHECKSUM_FILENAME
        try:
            tmp_file.write_bytes(checksum.encode("utf-8", errors="surrogateescape"))
            os.replace(tmp_file, self.root.checksum_file_path())
        except OSError as exc:
            raise DownloadFailedError("Could not write contents of local checksum file") from exc
        self.checksums.invalidate_local()
