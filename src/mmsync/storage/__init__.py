"""
Local storage of the geolocation library and its synchronization.

The storage root is a writable directory with this layout:

    local.md5
        Checksum of the remote archive the local library comes from.

    library.mmdb
        The local copy of the library.

    .lock
        Lock file serializing concurrent syncs.

    tmp-dl-<unix-seconds>-<random>/
        Work directory of an in-flight (or interrupted) sync, holding
        the downloaded `tmp.tar.gz` and its extracted contents.

The local copy is usable when both `local.md5` and `library.mmdb` exist.
"""

from .checksum import ChecksumOracle
from .detect import ChangeDetector
from .root import StorageRoot
from .sweep import RecoverySweeper
from .sync import SyncEngine

__all__ = [
    "ChangeDetector",
    "ChecksumOracle",
    "RecoverySweeper",
    "StorageRoot",
    "SyncEngine",
]
