"""Tests for recordkeep.core.settings module.

Covers:
- Defaults
- Environment variable override
- Validation errors wrapped as ConfigError
- Caching
"""

from pathlib import Path

import pytest

from recordkeep.core.errors import ConfigError
from recordkeep.core.settings import (
    RecordkeepSettings,
    StoreBackend,
    clear_settings_cache,
    get_settings,
)


@pytest.fixture
def bare_env(monkeypatch):
    for name in ("RECORDKEEP_DATA_DIR", "RECORDKEEP_STORE_BACKEND"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_defaults(self, bare_env):
        s = RecordkeepSettings(_env_file=None)
        assert s.store_backend is StoreBackend.SQLITE
        assert s.store_filename == "settings.db"
        assert s.strict_decode is False
        assert s.log_level == "INFO"
        assert s.json_logs is None

    def test_default_data_dir_is_platform_dir(self, bare_env):
        from platformdirs import user_data_dir

        s = RecordkeepSettings(_env_file=None)
        assert s.data_dir == Path(user_data_dir("recordkeep", appauthor=False))

    def test_store_path(self, tmp_path):
        s = RecordkeepSettings(data_dir=tmp_path, store_filename="kv.db")
        assert s.store_path == tmp_path / "kv.db"


class TestEnvOverride:
    def test_data_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RECORDKEEP_DATA_DIR", str(tmp_path / "records"))
        assert RecordkeepSettings().data_dir == tmp_path / "records"

    def test_data_dir_expands_user(self, monkeypatch):
        monkeypatch.setenv("RECORDKEEP_DATA_DIR", "~/records")
        assert RecordkeepSettings().data_dir == Path.home() / "records"

    def test_store_backend(self, monkeypatch):
        monkeypatch.setenv("RECORDKEEP_STORE_BACKEND", "memory")
        assert RecordkeepSettings().store_backend is StoreBackend.MEMORY

    def test_strict_decode(self, monkeypatch):
        monkeypatch.setenv("RECORDKEEP_STRICT_DECODE", "1")
        assert RecordkeepSettings().strict_decode is True

    def test_log_level_is_uppercased(self, monkeypatch):
        monkeypatch.setenv("RECORDKEEP_LOG_LEVEL", "debug")
        assert RecordkeepSettings().log_level == "DEBUG"


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_force_reload(self):
        first = get_settings()
        assert get_settings(_force_reload=True) is not first

    def test_clear_cache(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("RECORDKEEP_LOG_LEVEL", "ERROR")
        clear_settings_cache()
        second = get_settings()
        assert second is not first
        assert second.log_level == "ERROR"

    def test_invalid_value_raises_config_error(self, monkeypatch):
        monkeypatch.setenv("RECORDKEEP_STORE_BACKEND", "redis")
        clear_settings_cache()
        with pytest.raises(ConfigError) as exc_info:
            get_settings()
        assert exc_info.value.category.value == "CONFIG"

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("RECORDKEEP_LOG_LEVEL", "LOUD")
        clear_settings_cache()
        with pytest.raises(ConfigError):
            get_settings()
