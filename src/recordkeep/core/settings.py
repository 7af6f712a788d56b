"""Settings for recordkeep.

All fields can be set via ``RECORDKEEP_*`` environment variables (e.g.
``RECORDKEEP_DATA_DIR=/srv/records``) or a ``.env`` file.

Fields
──────
data_dir        : Application-private directory for files and the settings store
store_backend   : ``sqlite`` (persists across restarts) or ``memory``
store_filename  : SQLite file name inside ``data_dir``
strict_decode   : Raise on the first undecodable entry instead of dropping it
log_level       : Structlog log level
json_logs       : Force JSON (True) or console (False) logs; auto when unset
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from recordkeep.core.errors import ConfigError

APP_NAME = "recordkeep"


class StoreBackend(str, Enum):
    SQLITE = "sqlite"
    MEMORY = "memory"


class RecordkeepSettings(BaseSettings):
    """recordkeep configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RECORDKEEP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Storage ──────────────────────────────────────────────────
    data_dir: Path = Field(
        default_factory=lambda: Path(user_data_dir(APP_NAME, appauthor=False)),
        description="Application-private data directory",
    )
    store_backend: StoreBackend = Field(default=StoreBackend.SQLITE)
    store_filename: str = Field(default="settings.db")

    # ── Codec ────────────────────────────────────────────────────
    strict_decode: bool = Field(default=False)

    # ── Observability ────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    json_logs: bool | None = Field(default=None)

    @field_validator("data_dir")
    @classmethod
    def _expand_data_dir(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    # ── Derived properties ───────────────────────────────────────

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.store_filename


_settings_cache: dict[str, RecordkeepSettings] = {}


def get_settings(*, _force_reload: bool = False) -> RecordkeepSettings:
    """Load, validate, and cache a :class:`RecordkeepSettings` instance.

    Raises:
        ConfigError: if an environment value fails validation.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    try:
        settings = RecordkeepSettings()
    except ValidationError as exc:
        raise ConfigError(f"invalid recordkeep settings: {exc}", cause=exc) from exc
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "APP_NAME",
    "StoreBackend",
    "RecordkeepSettings",
    "get_settings",
    "clear_settings_cache",
]
