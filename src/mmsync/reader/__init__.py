"""Lookup of addresses in the local copy of the library."""

from .client_ip import client_ip
from .reader import DatabaseReader, GeoReader, LookupCache, open_database

__all__ = [
    "DatabaseReader",
    "GeoReader",
    "LookupCache",
    "client_ip",
    "open_database",
]
