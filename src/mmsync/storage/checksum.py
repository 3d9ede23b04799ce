"""Module implementing the local and foreign checksum lookup."""

from __future__ import annotations

import logging

import requests

from ..config import SyncConfig, prepare_url
from ..errors import DownloadFailedError
from ..http import HTTPClient
from .root import StorageRoot

log = logging.getLogger("storage/checksum")


class ChecksumOracle:
    """
    Knows the checksum of the local library and of the remote one.

    Both checksums are memoized for the lifetime of the instance. The
    local value is only memoized when the local copy exists, and is
    forgotten by `invalidate_local`. Whether the local copy exists is
    never memoized.
    """

    def __init__(
        self,
        *,
        root: StorageRoot,
        license_key: str,
        http: HTTPClient,
        config: SyncConfig,
    ):
        self.root = root
        self.license_key = license_key
        self.http = http
        self.config = config
        self._local_checksum: str | None = None
        self._foreign_checksum: str | None = None

    def has_local_file(self) -> bool:
        """Return True if both the checksum and the library file exist."""
        return self.root.checksum_file_path().exists() and self.root.library_file_path().exists()

    def local_checksum(self) -> str | None:
        """Return the checksum of the local library or None when there is no local copy."""
        if self._local_checksum is not None:
            return self._local_checksum
        if not self.has_local_file():
            return None
        content = self.root.checksum_file_path().read_bytes()
        self._local_checksum = content.decode("utf-8", errors="surrogateescape")
        return self._local_checksum

    def foreign_checksum(self) -> str:
        """
        Return the checksum published alongside the remote library.

        Raises:
            DownloadFailedError: if we cannot fetch the checksum.
        """
        if self._foreign_checksum is not None:
            return self._foreign_checksum
        url = prepare_url(self.config.library_md5_url, self.license_key)
        log.info("fetching remote checksum... start")
        try:
            body = self.http.fetch_text(url, timeout=self.config.checksum_timeout)
        except (requests.RequestException, UnicodeError) as exc:
            log.warning("fetching remote checksum... failure: %s", exc)
            raise DownloadFailedError("Could not download the library's md5 hash!") from exc
        log.info("fetching remote checksum... ok")
        self._foreign_checksum = body
        return body

    def invalidate_local(self) -> None:
        """Forget the memoized local checksum."""
        self._local_checksum = None

    def invalidate_foreign(self) -> None:
        """Forget the memoized foreign checksum so the next call refetches it."""
        self._foreign_checksum = None
