"""Module implementing the GeoReader type."""

from __future__ import annotations

import hashlib
import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Protocol

import maxminddb

from ..config import ReaderConfig
from .client_ip import client_ip

log = logging.getLogger("reader")

CACHE_KEY_PREFIX: Final[str] = "maxmind-ip-location-cache-"


class DatabaseReader(Protocol):
    """Reader of the binary library, e.g. a `maxminddb.Reader`."""

    def get(self, ip_address: str) -> Any: ...


class LookupCache(Protocol):
    """
    Cache storing serialized lookup results.

    Methods:
        has: return whether the key is cached.
        get: return the cached value.
        set: store the value for `ttl` seconds.
    """

    def has(self, key: str) -> bool: ...

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str, ttl: int) -> None: ...


def open_database(path: str | Path) -> maxminddb.Reader:
    """Open the library at the given path, e.g. `SyncEngine.run()`'s result."""
    return maxminddb.open_database(os.fspath(path))


class GeoReader:
    """Looks up addresses in the library, optionally caching the results."""

    def __init__(
        self,
        database: DatabaseReader,
        cache: LookupCache | None = None,
        config: ReaderConfig | None = None,
    ):
        self.database = database
        self.cache = cache
        self.config = config if config is not None else ReaderConfig()

    def get_information(
        self,
        ip: str = "",
        environ: Mapping[str, str] | None = None,
    ) -> dict[str, Any] | None:
        """
        Return all the information we have about the given address.

        Parameters:
            ip: address to look up. When empty, we look up the client
                address found in `environ` (default: `os.environ`).

        Returns:
            The library record or None when the address is unknown.
        """
        if not ip:
            ip = client_ip(os.environ if environ is None else environ)

        cache_key = None
        if self.cache is not None:
            cache_key = CACHE_KEY_PREFIX + hashlib.md5(ip.encode()).hexdigest()
            # The entry may expire between has() and get(), so only get() is trusted
            cached = self.cache.get(cache_key) if self.cache.has(cache_key) else None
            if cached is not None:
                log.debug("cache hit for %s", ip)
                return json.loads(cached)

        record = self.database.get(ip)
        if not record:
            return None

        if cache_key is not None:
            self.cache.set(cache_key, json.dumps(record), self.config.cache_ttl)
        return record

    def get_location(
        self,
        ip: str = "",
        environ: Mapping[str, str] | None = None,
    ) -> dict[str, float] | None:
        """Return only the latitude and longitude of the given address."""
        record = self.get_information(ip, environ)
        if not record or "location" not in record:
            return None
        location = record["location"]
        return {key: location[key] for key in ("latitude", "longitude") if key in location}
