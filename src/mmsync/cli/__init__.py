"""mmsync command-line interface."""

from importlib.metadata import version

import click

from .clean import clean
from .lookup import lookup
from .status import status
from .sync import sync

_PACKAGE_NAME = "mmsync"

_EPILOG = """\b
The storage directory (default: ./.mmsync) holds:
  library.mmdb   the local copy of the library
  local.md5      checksum of the archive it came from
  tmp-dl-*       work directories of unfinished syncs

The license key is read from MAXMIND_LICENSE_KEY unless --license-key is given."""


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=_EPILOG,
)
@click.version_option(message="%(version)s", package_name=_PACKAGE_NAME)
def cli() -> None:
    """Download the MaxMind GeoIP library and look up addresses in it.

    Run `mmsync sync` periodically to keep the local copy in step with
    the published one; it only downloads when the remote checksum differs.
    """


@cli.command(hidden=True)
def help() -> None:
    """Show usage information."""
    click.echo('Use "mmsync --help" for usage information.')
    click.echo('Use "mmsync <command> --help" for help on a specific command.')


@cli.command("version")
def version_cmd() -> None:
    """Print the version number."""
    click.echo(version(_PACKAGE_NAME))


for _command in (sync, status, clean, lookup):
    cli.add_command(_command)
