"""Tests for recordkeep.cli.app: demo / inspect / --version."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from recordkeep import __version__
from recordkeep.cli.app import app
from recordkeep.core import wire
from recordkeep.core.backends import FileBackend
from recordkeep.example import SampleRecord

runner = CliRunner()


@pytest.fixture(autouse=True)
def mock_configure_logging():
    """Keep the global structlog configuration untouched."""
    with patch("recordkeep.cli.app.configure_logging") as mock:
        yield mock


class TestRoot:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.output.startswith("recordkeep ")

    def test_version_fallback(self):
        from importlib.metadata import PackageNotFoundError

        with patch("importlib.metadata.version", side_effect=PackageNotFoundError):
            result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "demo" in result.output
        assert "inspect" in result.output

    def test_configures_logging_from_settings(self, mock_configure_logging, monkeypatch):
        from recordkeep.core.settings import clear_settings_cache

        monkeypatch.setenv("RECORDKEEP_LOG_LEVEL", "debug")
        monkeypatch.setenv("RECORDKEEP_JSON_LOGS", "true")
        clear_settings_cache()
        runner.invoke(app, ["demo"])
        mock_configure_logging.assert_called_once_with(level="DEBUG", json_format=True)

    def test_invalid_settings(self, monkeypatch):
        from recordkeep.core.settings import clear_settings_cache

        monkeypatch.setenv("RECORDKEEP_STORE_BACKEND", "redis")
        clear_settings_cache()
        result = runner.invoke(app, ["demo"])
        assert result.exit_code == 1
        assert "Configuration Error" in result.output


class TestDemo:
    def test_demo_writes_file(self, data_dir):
        result = runner.invoke(app, ["demo"])
        assert result.exit_code == 0, result.output
        assert (data_dir / "MyData.dat").exists()
        assert "absent" in result.output
        assert len(FileBackend(data_dir).load(SampleRecord, "MyData.dat")) == 2

    def test_demo_custom_names(self, tmp_path):
        result = runner.invoke(
            app,
            ["demo", "--data-dir", str(tmp_path), "--file-name", "out.dat", "--key", "K", "--memory"],
        )
        assert result.exit_code == 0, result.output
        assert (tmp_path / "out.dat").exists()
        assert not (tmp_path / "settings.db").exists()

    def test_demo_with_sqlite_store(self, tmp_path):
        result = runner.invoke(app, ["demo", "--data-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "settings.db").exists()

    def test_demo_failed_save_exits_1(self, tmp_path):
        result = runner.invoke(app, ["demo", "--data-dir", str(tmp_path), "--file-name", "../x.dat"])
        assert result.exit_code == 1
        assert not (tmp_path.parent / "x.dat").exists()


class TestInspect:
    def test_inspect_after_demo(self, data_dir):
        runner.invoke(app, ["demo"])
        result = runner.invoke(app, ["inspect", "MyData.dat"])
        assert result.exit_code == 0, result.output
        assert "2 mapping(s)" in result.output

    def test_inspect_data_dir_option(self, tmp_path):
        (tmp_path / "f.dat").write_bytes(wire.dumps([{"n": 1}]))
        result = runner.invoke(app, ["inspect", "f.dat", "--data-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "1 mapping(s)" in result.output

    def test_inspect_empty_file(self, tmp_path):
        (tmp_path / "f.dat").write_bytes(wire.dumps([]))
        result = runner.invoke(app, ["inspect", "f.dat", "--data-dir", str(tmp_path)])
        assert result.exit_code == 0
        assert "No records" in result.output

    def test_inspect_missing_file(self):
        result = runner.invoke(app, ["inspect", "nonexistent.dat"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_inspect_corrupt_file(self, tmp_path):
        (tmp_path / "f.dat").write_bytes(b"garbage")
        result = runner.invoke(app, ["inspect", "f.dat", "--data-dir", str(tmp_path)])
        assert result.exit_code == 1
