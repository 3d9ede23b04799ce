"""Status command."""

import click
from rich.console import Console
from rich.markup import escape

from ..config import load_config
from ..errors import MMSyncError
from ..storage import SyncEngine
from ..storage.root import storage_dir_or_default
from .options import (
    click_error,
    config_option,
    license_key_option,
    require_license_key,
    storage_dir_option,
)


@click.command()
@storage_dir_option
@license_key_option
@config_option
@click.option("--offline", is_flag=True, help="Do not fetch the remote checksum")
def status(
    storage_dir: str | None,
    license_key: str | None,
    config_file: str | None,
    offline: bool,
) -> None:
    """Show the local library status relative to the remote one.

    \b
    Exits with 0 when the library is up to date (or, with --offline,
    when a local copy exists) and 1 otherwise.
    """
    if not offline:
        license_key = require_license_key(license_key)

    console = Console()
    try:
        config = load_config(config_file)
        engine = SyncEngine(
            storage_dir=storage_dir_or_default(storage_dir),
            license_key=license_key or "",
            config=config.sync,
        )
        checksums = engine.checksums
        has_local = checksums.has_local_file()
        console.print(f"library:         {escape(str(engine.library_file_path()))}")
        if has_local:
            console.print("local copy:      [green]present[/]")
            console.print(f"local checksum:  {escape(checksums.local_checksum() or '')}")
        else:
            console.print("local copy:      [red]missing[/]")
        if offline:
            raise SystemExit(0 if has_local else 1)

        console.print(f"remote checksum: {escape(checksums.foreign_checksum())}")
        required = engine.is_download_required()
    except MMSyncError as exc:
        raise click_error(exc) from exc

    if required:
        console.print("[yellow]update required[/]")
        raise SystemExit(1)
    console.print("[green]up to date[/]")
