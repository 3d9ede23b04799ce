"""Lookup command."""

import click
from rich.console import Console

from ..errors import MMSyncError
from ..reader import GeoReader, open_database
from ..storage import StorageRoot
from ..storage.root import storage_dir_or_default
from .options import click_error, storage_dir_option


@click.command()
@click.argument("ip")
@storage_dir_option
@click.option("--location", is_flag=True, help="Only print latitude and longitude")
def lookup(ip: str, storage_dir: str | None, location: bool) -> None:
    """Print what the local library knows about IP as JSON."""
    try:
        root = StorageRoot(storage_dir_or_default(storage_dir))
    except MMSyncError as exc:
        raise click_error(exc) from exc

    library = root.library_file_path()
    if not library.exists():
        raise click.ClickException(f"No local library in {root.path}: run `mmsync sync` first")

    with open_database(library) as database:
        reader = GeoReader(database)
        try:
            result = reader.get_location(ip) if location else reader.get_information(ip)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="IP") from exc

    Console().print_json(data=result)
