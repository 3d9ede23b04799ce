"""Local mirror of a MaxMind GeoIP library.

This library keeps a local copy of the GeoLite2 library in sync with
the publisher and resolves addresses using that copy.
"""

from importlib.metadata import PackageNotFoundError, version

from .config import MMSyncConfig, ReaderConfig, SyncConfig, load_config
from .errors import DownloadFailedError, InvalidConfigurationError, MMSyncError
from .reader import GeoReader, open_database
from .storage import StorageRoot, SyncEngine

try:
    __version__ = version("mmsync")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "DownloadFailedError",
    "GeoReader",
    "InvalidConfigurationError",
    "MMSyncConfig",
    "MMSyncError",
    "ReaderConfig",
    "StorageRoot",
    "SyncConfig",
    "SyncEngine",
    "load_config",
    "open_database",
    "__version__",
]
