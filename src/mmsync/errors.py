"""Errors emitted by the mmsync library."""


class MMSyncError(Exception):
    """Base class for all the errors emitted by this library."""


class DownloadFailedError(MMSyncError, RuntimeError):
    """
    Error emitted when we cannot synchronize the local library.

    This covers fetching the remote checksum or archive, creating the
    work directory, extracting the archive, locating the extracted
    database, replacing the local library and persisting the checksum.
    The underlying error, if any, is available as `__cause__`.
    """


class InvalidConfigurationError(MMSyncError, ValueError):
    """Error emitted for an invalid storage directory or configuration."""
