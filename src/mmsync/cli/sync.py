"""Sync command."""

import click

from ..config import load_config
from ..errors import MMSyncError
from ..storage import SyncEngine
from ..storage.root import storage_dir_or_default
from .logger import configure_logging
from .options import (
    click_error,
    config_option,
    license_key_option,
    require_license_key,
    storage_dir_option,
    verbose_option,
)


@click.command()
@storage_dir_option
@license_key_option
@config_option
@click.option("-f", "--force", is_flag=True, help="Download even if the library is up to date")
@verbose_option
def sync(
    storage_dir: str | None,
    license_key: str | None,
    config_file: str | None,
    force: bool,
    verbose: bool,
) -> None:
    """Download the library if it is missing or outdated.

    The default storage directory is created if needed. A directory
    given with `-d, --dir` must already exist.
    """
    license_key = require_license_key(license_key)
    configure_logging(verbose)
    resolved = storage_dir_or_default(storage_dir)
    if storage_dir is None:
        resolved.mkdir(parents=True, exist_ok=True)

    try:
        config = load_config(config_file)
        engine = SyncEngine(storage_dir=resolved, license_key=license_key, config=config.sync)
        if force:
            engine.run()
            performed = True
        else:
            performed = engine.sync_if_required()
    except MMSyncError as exc:
        raise click_error(exc) from exc

    if performed:
        click.echo(f"Library updated: {engine.library_file_path()}")
    else:
        click.echo(f"Library is up to date: {engine.library_file_path()}")
