"""Module containing the mmsync configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Final

import dacite
import yaml

from .errors import InvalidConfigurationError

DEFAULT_LIBRARY_URL: Final[str] = (
    "https://download.maxmind.com/app/geoip_download"
    "?edition_id=GeoLite2-City&license_key={{licenseKey}}&suffix=tar.gz"
)
"""URL of the library archive, see `prepare_url` for the placeholders."""

DEFAULT_LIBRARY_MD5_URL: Final[str] = (
    "https://download.maxmind.com/app/geoip_download"
    "?edition_id=GeoLite2-City&license_key={{licenseKey}}&suffix=tar.gz.md5"
)
"""URL of the checksum of the library archive."""

DEFAULT_CACHE_TTL: Final[int] = 60 * 60 * 12

# Spellings used by older configuration files and callers.
_KEY_ALIASES: Final[dict[str, str]] = {
    "libraryUrl": "library_url",
    "libraryMd5Url": "library_md5_url",
    "cacheTtl": "cache_ttl",
}


def _coerce_float(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Cannot coerce {type(value)} to float")
    return float(value)


_DACITE_CONFIG: Final = dacite.Config(strict=True, type_hooks={float: _coerce_float})


def _override(config: Any, key: str, value: object) -> Any:
    name = _KEY_ALIASES.get(key, key)
    if name not in {f.name for f in fields(config)}:
        raise InvalidConfigurationError(f"The given config key: {key} is not valid!")
    data = asdict(config)
    data[name] = value
    try:
        return dacite.from_dict(type(config), data, config=_DACITE_CONFIG)
    except (dacite.DaciteError, TypeError) as exc:
        raise InvalidConfigurationError(f"Invalid value for config key {key}: {exc}") from exc


@dataclass(frozen=True, kw_only=True)
class SyncConfig:
    """
    Configuration of the synchronization engine.

    Attributes:
        library_url: template of the URL serving the library archive.
        library_md5_url: template of the URL serving the archive checksum.
        checksum_timeout: timeout in seconds when fetching the checksum.
        library_timeout: timeout in seconds when fetching the archive.
    """

    library_url: str = DEFAULT_LIBRARY_URL
    library_md5_url: str = DEFAULT_LIBRARY_MD5_URL
    checksum_timeout: float = 2.0
    library_timeout: float = 20.0

    def override(self, key: str, value: object) -> SyncConfig:
        """
        Return a copy of the config where `key` is set to `value`.

        Raises:
            InvalidConfigurationError: if the key is unknown or the value
                has the wrong type.
        """
        return _override(self, key, value)


@dataclass(frozen=True, kw_only=True)
class ReaderConfig:
    """
    Configuration of the lookup reader.

    Attributes:
        cache_ttl: how long cached lookups stay valid, in seconds.
    """

    cache_ttl: int = DEFAULT_CACHE_TTL

    def override(self, key: str, value: object) -> ReaderConfig:
        """Like `SyncConfig.override` but for the reader."""
        return _override(self, key, value)


@dataclass(frozen=True, kw_only=True)
class MMSyncConfig:
    """Root of the YAML configuration file."""

    version: int = 0
    sync: SyncConfig = field(default_factory=SyncConfig)
    reader: ReaderConfig = field(default_factory=ReaderConfig)

    def __post_init__(self):
        if self.version != 0:
            raise InvalidConfigurationError(
                f"Unsupported config version: {self.version} (only version=0 supported)"
            )


def load_config(config_path: str | Path | None = None) -> MMSyncConfig:
    """
    Load the configuration from the given YAML file.

    When `config_path` is None, return the default configuration.

    Raises:
        InvalidConfigurationError: if the file is missing, is not valid
            YAML, or contains unknown keys or wrongly-typed values.
    """
    if config_path is None:
        return MMSyncConfig()

    path = Path(config_path)
    try:
        content = path.read_text()
    except FileNotFoundError as exc:
        raise InvalidConfigurationError(f"Config not found: {path}") from exc

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as exc:
        raise InvalidConfigurationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidConfigurationError("Config must be a mapping.")

    try:
        return dacite.from_dict(MMSyncConfig, data, config=_DACITE_CONFIG)
    except (dacite.DaciteError, TypeError) as exc:
        raise InvalidConfigurationError(f"Invalid config: {exc}") from exc


def prepare_url(template: str, license_key: str, today: date | None = None) -> str:
    """
    Return the URL obtained by replacing the placeholders in `template`.

    The `{{licenseKey}}` placeholder is replaced with `license_key` and the
    `{{yyyymmdd}}` placeholder with `today` (default: the current UTC date).
    """
    if today is None:
        today = datetime.now(timezone.utc).date()
    return template.replace("{{yyyymmdd}}", today.strftime("%Y%m%d")).replace(
        "{{licenseKey}}", license_key
    )
