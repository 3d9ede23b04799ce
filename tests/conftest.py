"""Shared pytest fixtures for mmsync tests."""

import io
import tarfile
from collections.abc import Callable
from pathlib import Path

import pytest


class FakeHTTPClient:
    """HTTPClient serving canned responses and recording the requests."""

    def __init__(
        self,
        *,
        checksum: str = "abc123",
        archive: bytes = b"",
        checksum_error: Exception | None = None,
        archive_error: Exception | None = None,
    ):
        self.checksum = checksum
        self.archive = archive
        self.checksum_error = checksum_error
        self.archive_error = archive_error
        self.text_calls: list[tuple[str, float]] = []
        self.file_calls: list[tuple[str, Path, float]] = []

    def fetch_text(self, url: str, *, timeout: float) -> str:
        self.text_calls.append((url, timeout))
        if self.checksum_error is not None:
            raise self.checksum_error
        return self.checksum

    def fetch_to_file(self, url: str, dest: Path, *, timeout: float) -> None:
        self.file_calls.append((url, dest, timeout))
        if self.archive_error is not None:
            raise self.archive_error
        dest.write_bytes(self.archive)


def _make_tarball(members: dict[str, bytes]) -> bytes:
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, content in members.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    return buf.getvalue()


@pytest.fixture
def make_tarball() -> Callable[[dict[str, bytes]], bytes]:
    """Return a function building a .tar.gz from a name => content mapping."""
    return _make_tarball


@pytest.fixture
def fake_http() -> type[FakeHTTPClient]:
    """Return the FakeHTTPClient class."""
    return FakeHTTPClient


@pytest.fixture
def library_content() -> bytes:
    """Return the content of the database in the default test archive."""
    return b"X" * 100


@pytest.fixture
def library_tarball(library_content: bytes) -> bytes:
    """Return an archive shaped like the ones served by the publisher."""
    return _make_tarball(
        {
            "GeoLite2-City_20230101/COPYRIGHT.txt": b"copyright",
            "GeoLite2-City_20230101/GeoLite2-City.mmdb": library_content,
        }
    )
