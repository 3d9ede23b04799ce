"""Clean command."""

import click
from filelock import FileLock

from ..errors import MMSyncError
from ..storage import RecoverySweeper, StorageRoot
from ..storage.root import storage_dir_or_default
from .logger import configure_logging
from .options import click_error, storage_dir_option, verbose_option


@click.command()
@storage_dir_option
@verbose_option
def clean(storage_dir: str | None, verbose: bool) -> None:
    """Remove work directories left behind by interrupted syncs."""
    configure_logging(verbose)
    try:
        root = StorageRoot(storage_dir_or_default(storage_dir))
    except MMSyncError as exc:
        raise click_error(exc) from exc
    # A concurrent sync owns its work directory until it releases the lock
    with FileLock(root.lock_file_path()):
        RecoverySweeper(root).sweep()
    click.echo(f"Cleaned {root.path}")
