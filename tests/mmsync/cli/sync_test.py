"""Tests for the mmsync.cli.sync module."""

from pathlib import Path
from unittest.mock import patch

import requests
import yaml
from click.testing import CliRunner

from mmsync.cli import cli


def _invoke(args, http, env=None):
    runner = CliRunner()
    with patch("mmsync.storage.sync.RequestsHTTPClient", return_value=http):
        return runner.invoke(cli, ["sync", *args], env=env)


class TestSyncLicenseKey:
    """The license key is mandatory."""

    def test_missing(self, tmp_path: Path, fake_http):
        result = _invoke(["-d", str(tmp_path)], fake_http(), env={"MAXMIND_LICENSE_KEY": ""})
        assert result.exit_code == 2
        assert "missing license key" in result.output

    def test_from_environment(self, tmp_path: Path, fake_http, library_tarball):
        http = fake_http(archive=library_tarball)
        result = _invoke(["-d", str(tmp_path)], http, env={"MAXMIND_LICENSE_KEY": "ENVKEY"})
        assert result.exit_code == 0
        assert "license_key=ENVKEY" in http.file_calls[0][0]


class TestSyncDownload:
    """Downloading the library."""

    def test_first_run(self, tmp_path: Path, fake_http, library_tarball, library_content):
        http = fake_http(checksum="abc123", archive=library_tarball)
        result = _invoke(["-d", str(tmp_path), "--license-key", "KEY"], http)
        assert result.exit_code == 0
        assert "Library updated" in result.output
        assert (tmp_path / "library.mmdb").read_bytes() == library_content
        assert (tmp_path / "local.md5").read_text() == "abc123"

    def test_up_to_date(self, tmp_path: Path, fake_http):
        (tmp_path / "local.md5").write_text("abc123")
        (tmp_path / "library.mmdb").write_bytes(b"db")
        http = fake_http(checksum="abc123")
        result = _invoke(["-d", str(tmp_path), "--license-key", "KEY"], http)
        assert result.exit_code == 0
        assert "up to date" in result.output
        assert http.file_calls == []

    def test_force(self, tmp_path: Path, fake_http, library_tarball, library_content):
        (tmp_path / "local.md5").write_text("abc123")
        (tmp_path / "library.mmdb").write_bytes(b"db")
        http = fake_http(checksum="abc123", archive=library_tarball)
        result = _invoke(["-d", str(tmp_path), "--license-key", "KEY", "--force"], http)
        assert result.exit_code == 0
        assert (tmp_path / "library.mmdb").read_bytes() == library_content

    def test_default_dir_is_created(self, tmp_path: Path, fake_http, library_tarball, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = _invoke(["--license-key", "KEY"], fake_http(archive=library_tarball))
        assert result.exit_code == 0
        assert (tmp_path / ".mmsync" / "library.mmdb").exists()

    def test_config_file(self, tmp_path: Path, fake_http, library_tarball):
        config = tmp_path / "config.yaml"
        config.write_text(
            yaml.dump({"sync": {"library_url": "https://mirror.example.com/{{licenseKey}}"}})
        )
        storage = tmp_path / "storage"
        storage.mkdir()
        http = fake_http(archive=library_tarball)
        result = _invoke(["-d", str(storage), "--license-key", "KEY", "-c", str(config)], http)
        assert result.exit_code == 0
        assert http.file_calls[0][0] == "https://mirror.example.com/KEY"


class TestSyncFailures:
    """Failures are reported with exit code 1."""

    def test_missing_dir(self, tmp_path: Path, fake_http):
        result = _invoke(["-d", str(tmp_path / "missing"), "--license-key", "KEY"], fake_http())
        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_download_failure(self, tmp_path: Path, fake_http):
        http = fake_http(archive_error=requests.ConnectionError("connection reset"))
        result = _invoke(["-d", str(tmp_path), "--license-key", "KEY"], http)
        assert result.exit_code == 1
        assert "Could not download the library file" in result.output
        assert "connection reset" in result.output
        assert not (tmp_path / "library.mmdb").exists()

    def test_invalid_config(self, tmp_path: Path, fake_http):
        config = tmp_path / "config.yaml"
        config.write_text(yaml.dump({"sync": {"unknown": 1}}))
        args = ["-d", str(tmp_path), "--license-key", "KEY", "-c", str(config)]
        result = _invoke(args, fake_http())
        assert result.exit_code == 1
        assert "Invalid config" in result.output
