"""Module deciding whether the local library must be replaced."""

from .checksum import ChecksumOracle


class ChangeDetector:
    """Compares the local and the foreign checksum."""

    def __init__(self, checksums: ChecksumOracle):
        self.checksums = checksums

    def is_download_required(self) -> bool:
        """
        Return True if there is no local copy or the remote library changed.

        Raises:
            DownloadFailedError: if we cannot fetch the foreign checksum.
        """
        if not self.checksums.has_local_file():
            return True
        return self.checksums.local_checksum() != self.checksums.foreign_checksum()
