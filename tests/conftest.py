"""
Shared pytest fixtures and configuration for recordkeep tests.

This module provides:
- Settings isolation: every test gets its own data directory and an
  in-memory default store
- Sample records with a fixed timestamp

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    def test_round_trip(records):
        ...
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Generator

import pytest

# Ensure recordkeep package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from recordkeep.core.settings import clear_settings_cache
from recordkeep.core.stores import InMemoryStore, reset_default_store
from recordkeep.example import SampleRecord, sample_records


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Mark tests without an explicit marker as unit tests."""
    for item in items:
        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "integration"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Settings Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point the data directory at a temp dir and use an in-memory default store."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("RECORDKEEP_DATA_DIR", str(data_dir))
    monkeypatch.setenv("RECORDKEEP_STORE_BACKEND", "memory")
    monkeypatch.delenv("RECORDKEEP_STRICT_DECODE", raising=False)
    monkeypatch.delenv("RECORDKEEP_LOG_LEVEL", raising=False)
    clear_settings_cache()
    reset_default_store()
    yield data_dir
    clear_settings_cache()
    reset_default_store()


@pytest.fixture
def data_dir(isolated_settings: Path) -> Path:
    """The per-test data directory (not created until something writes to it)."""
    return isolated_settings


# =============================================================================
# Records
# =============================================================================


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 1, 15, 10, 30, 45, 123456, tzinfo=timezone.utc)


@pytest.fixture
def records(fixed_now: datetime) -> list[SampleRecord]:
    """Records A ("One") and B ("Two")."""
    return sample_records(fixed_now)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()
