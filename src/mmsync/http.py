"""HTTP transport used to fetch the checksum and the library archive."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import requests
from tqdm import tqdm

log = logging.getLogger("http")

CHUNK_SIZE = 8192


class HTTPClient(Protocol):
    """
    Minimal HTTP client interface required to sync the library.

    Methods:
        fetch_text: GET the given URL and return the body as text.
        fetch_to_file: GET the given URL and stream the body into `dest`.

    Both methods raise `requests.RequestException` (or a subclass of it)
    on transport failures and non-successful HTTP statuses.
    """

    def fetch_text(self, url: str, *, timeout: float) -> str: ...

    def fetch_to_file(self, url: str, dest: Path, *, timeout: float) -> None: ...


class RequestsHTTPClient:
    """HTTPClient implementation using a requests.Session."""

    def __init__(self, session: requests.Session | None = None, *, progress: bool = True):
        self.session = session if session is not None else requests.Session()
        self.progress = progress

    def fetch_text(self, url: str, *, timeout: float) -> str:
        resp = self.session.get(url, timeout=timeout)
        resp.raise_for_status()
        # Decode the raw bytes ourselves: the body is compared byte-exact
        # and requests would otherwise guess the charset. Undecodable
        # bytes survive as surrogates and encode back unchanged.
        return resp.content.decode("utf-8", errors="surrogateescape")

    def fetch_to_file(self, url: str, dest: Path, *, timeout: float) -> None:
        with self.session.get(url, stream=True, timeout=timeout) as resp:
            resp.raise_for_status()
            total = _content_length(resp.headers.get("Content-Length"))
            with (
                open(dest, "wb") as filep,
                tqdm(
                    total=total,
                    unit="B",
                    unit_scale=True,
                    unit_divisor=1024,
                    desc=dest.name,
                    disable=not self.progress,
                ) as pbar,
            ):
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    filep.write(chunk)
                    pbar.update(len(chunk))
        log.debug("fetched %s into %s", url, dest)


def _content_length(value: str | None) -> int | None:
    """Parse the Content-Length header, returning None when unknown or malformed."""
    if value is None:
        return None
    try:
        total = int(value)
    except ValueError:
        log.debug("ignoring malformed Content-Length: %r", value)
        return None
    return total if total >= 0 else None
