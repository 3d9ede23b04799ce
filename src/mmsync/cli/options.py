"""Options shared by the mmsync subcommands."""

import click

storage_dir_option = click.option(
    "-d",
    "--dir",
    "storage_dir",
    default=None,
    help="Storage directory (default: .mmsync)",
)

license_key_option = click.option(
    "--license-key",
    envvar="MAXMIND_LICENSE_KEY",
    default=None,
    help="MaxMind license key (default: $MAXMIND_LICENSE_KEY)",
)

config_option = click.option(
    "-c",
    "--config",
    "config_file",
    default=None,
    metavar="FILE",
    help="Path to YAML config file",
)

verbose_option = click.option(
    "-v", "--verbose", is_flag=True, default=False, help="Verbose mode."
)


def click_error(exc: Exception) -> click.ClickException:
    """Convert an error into a ClickException mentioning its cause."""
    message = str(exc)
    if exc.__cause__ is not None:
        message = f"{message} ({exc.__cause__})"
    return click.ClickException(message)


def require_license_key(license_key: str | None) -> str:
    """Return the license key or raise a usage error if it is missing."""
    if not license_key:
        raise click.UsageError("missing license key: use --license-key or set MAXMIND_LICENSE_KEY")
    return license_key
