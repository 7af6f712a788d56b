"""
Persistence backends: save and load record sequences.

Both backends work on the encoded form. ``save`` runs ``encode_all`` and
stores the mappings; ``load`` reads mappings back and runs ``decode_all``,
dropping entries that no longer decode.

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │  records ── encode_all ──► [mapping, ...]                      │
        │                               │                               │
        │              ┌────────────────┴────────────────┐              │
        │              ▼                                 ▼              │
        │      KeyValueBackend                     FileBackend          │
        │      store.set(key, mappings)            wire.dumps → atomic  │
        │                                          write to data dir    │
        └──────────────────────────────────────────────────────────────┘

    Loading reverses the arrows. A stored value that is not a list of
    mappings is reported as ``None`` exactly like a missing one.

Failure model:
    ==================  =======================  ==========================
    Failure             KeyValueBackend          FileBackend
    ==================  =======================  ==========================
    missing key/file    ``load`` → None          ``load`` → None (logged)
    shape mismatch      ``load`` → None          ``load`` → None (logged)
    path / I/O error    ``save`` raises          ``save`` → False (logged)
                        ``load`` → None (logged) ``load`` → None (logged)
    undecodable entry   dropped                  dropped
    ==================  =======================  ==========================

Usage:
    backend = KeyValueBackend(InMemoryStore())
    backend.save(records, "MyData")
    assert backend.load(SampleRecord, "MyData") == records
    assert backend.load(SampleRecord, "never-saved") is None

    files = FileBackend()
    if files.save(records, "MyData.dat"):
        restored = files.load(SampleRecord, "MyData.dat")

Tags:
    persistence, backend, key-value, file, atomic-write, recordkeep

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TypeVar

from recordkeep.core import wire
from recordkeep.core.batch import decode_all, encode_all
from recordkeep.core.codec import Codec
from recordkeep.core.errors import RecordkeepError, ShapeMismatchError, StorageError
from recordkeep.core.logging import get_logger
from recordkeep.core.paths import app_data_dir, atomic_write_bytes, resolve_path
from recordkeep.core.settings import get_settings
from recordkeep.core.stores import KeyValueStore, default_store

logger = get_logger(__name__)

R = TypeVar("R", bound=Codec)


def _strict_default(strict: bool | None) -> bool:
    if strict is None:
        return get_settings().strict_decode
    return strict


# ------------------------------------------------------------------ #
# Key-Value Store Backend
# ------------------------------------------------------------------ #


class KeyValueBackend:
    """Save/load record sequences under a key of a ``KeyValueStore``.

    Args:
        store: Store to use; ``None`` → :func:`default_store` on first use.
        strict: Raise on undecodable entries; ``None`` → ``strict_decode`` setting.
    """

    def __init__(self, store: KeyValueStore | None = None, *, strict: bool | None = None):
        self._store = store
        self._strict = strict

    @property
    def store(self) -> KeyValueStore:
        if self._store is None:
            self._store = default_store()
        return self._store

    def save(self, records: Sequence[Codec], key: str) -> None:
        """Store the encoded records at ``key``, overwriting any previous value."""
        mappings = encode_all(records)
        self.store.set(key, mappings)
        logger.debug("store_saved", key=key, count=len(mappings))

    def load(self, record_type: type[R], key: str) -> list[R] | None:
        """Decode the records stored at ``key``.

        Returns:
            ``None`` if nothing is stored, the value is not a list of
            mappings or the store cannot be read (logged); otherwise the
            decodable records in stored order.
        """
        try:
            raw = self.store.get(key)
        except ShapeMismatchError as exc:
            logger.warning("store_shape_mismatch", key=key, error=str(exc))
            return None
        except StorageError as exc:
            logger.error("store_load_failed", key=key, error=str(exc),
                         error_type=type(exc).__name__)
            return None
        if raw is None:
            return None
        if not wire.is_mapping_sequence(raw):
            logger.warning("store_shape_mismatch", key=key, value_type=type(raw).__name__)
            return None
        return decode_all(raw, record_type, strict=_strict_default(self._strict))


# ------------------------------------------------------------------ #
# File Store Backend
# ------------------------------------------------------------------ #


class FileBackend:
    """Save/load record sequences as files inside one data directory.

    ``save`` and ``load`` never raise for storage problems: failures are
    logged and reported as ``False`` / ``None``. With ``strict`` enabled,
    ``load`` raises ``DecodeError`` for the first undecodable entry.

    Args:
        directory: Data directory; ``None`` → the configured ``data_dir``.
        strict: Raise on undecodable entries; ``None`` → ``strict_decode`` setting.
    """

    def __init__(self, directory: str | Path | None = None, *, strict: bool | None = None):
        self._directory = Path(directory) if directory is not None else None
        self._strict = strict

    @property
    def directory(self) -> Path:
        if self._directory is None:
            return app_data_dir()
        return self._directory

    def path_for(self, name: str) -> Path:
        """Resolve ``name`` inside the data directory. Raises PathResolutionError."""
        return resolve_path(self.directory, name)

    def save(self, records: Sequence[Codec], name: str) -> bool:
        """Write the encoded records to ``name`` atomically.

        Returns:
            True on success, False on any path, serialization or I/O error.
        """
        try:
            path = self.path_for(name)
            data = wire.dumps(encode_all(records))
            atomic_write_bytes(path, data)
        except (RecordkeepError, OSError) as exc:
            logger.error("file_save_failed", name=name, error=str(exc),
                         error_type=type(exc).__name__)
            return False
        logger.debug("file_saved", path=str(path), count=len(records), size=len(data))
        return True

    def load(self, record_type: type[R], name: str) -> list[R] | None:
        """Read and decode the records stored in ``name``.

        Returns:
            ``None`` on any I/O error (including a missing file) or if the
            content is not a list of mappings; otherwise the decodable records.
        """
        try:
            path = self.path_for(name)
            mappings = wire.loads(path.read_bytes())
        except (RecordkeepError, OSError) as exc:
            logger.error("file_load_failed", name=name, error=str(exc),
                         error_type=type(exc).__name__)
            return None
        return decode_all(mappings, record_type, strict=_strict_default(self._strict))


# ------------------------------------------------------------------ #
# Module-level helpers using default backends
# ------------------------------------------------------------------ #


def save_to_store(records: Sequence[Codec], key: str, *, store: KeyValueStore | None = None) -> None:
    """Save ``records`` under ``key`` in ``store`` (default: process-wide store)."""
    KeyValueBackend(store).save(records, key)


def load_from_store(
    record_type: type[R], key: str, *, store: KeyValueStore | None = None
) -> list[R] | None:
    return KeyValueBackend(store).load(record_type, key)


def save_to_file(records: Sequence[Codec], name: str, *, directory: str | Path | None = None) -> bool:
    """Save ``records`` to ``name`` in the data directory."""
    return FileBackend(directory).save(records, name)


def load_from_file(
    record_type: type[R], name: str, *, directory: str | Path | None = None
) -> list[R] | None:
    return FileBackend(directory).load(record_type, name)


__all__ = [
    "KeyValueBackend",
    "FileBackend",
    "save_to_store",
    "load_from_store",
    "save_to_file",
    "load_from_file",
]
