"""
Key-value stores behind the key-value persistence backend.

Provides a ``KeyValueStore`` protocol with an in-memory and a SQLite
implementation. The backend receives a store as a dependency; code that does
not inject one gets the process-wide ``default_store()``.

Architecture:
    ::

        KeyValueStore (Protocol)
        ├── InMemoryStore   process-local, values deep-copied in and out
        └── SqliteStore     persists across restarts, values msgpack-encoded

        API: get(key) → value | None
             set(key, value)
             delete(key)
             exists(key) → bool
             clear()

Examples:
    >>> store = InMemoryStore()
    >>> store.set("MyData", [{"int": 1}])
    >>> store.get("MyData")
    [{'int': 1}]
    >>> store.exists("other")
    False

Guardrails:
    ❌ DON'T: Share an InMemoryStore between processes (nothing is shared)
    ✅ DO: Use SqliteStore when entries must survive a restart

    ❌ DON'T: Mutate a value after ``set`` expecting the store to see it
    ✅ DO: Call ``set`` again with the new value

Tags:
    key-value, store, sqlite, in-memory, protocol, recordkeep

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import copy
import sqlite3
from collections.abc import Iterator
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from recordkeep.core.errors import StorageError
from recordkeep.core.logging import get_logger
from recordkeep.core.settings import StoreBackend, get_settings
from recordkeep.core.timestamps import to_iso8601, utc_now
from recordkeep.core.wire import pack_value, unpack_value

logger = get_logger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for string-keyed stores of structured values."""

    def get(self, key: str) -> Any | None:
        """Return the value stored at ``key``, or ``None`` if absent."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` at ``key``, replacing any existing value."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key``. No-op if it does not exist."""
        ...

    def exists(self, key: str) -> bool:
        ...

    def clear(self) -> None:
        """Remove all keys. Use for testing only."""
        ...


# ------------------------------------------------------------------ #
# In-Memory Store
# ------------------------------------------------------------------ #


class InMemoryStore:
    """Process-local store.

    Values are deep-copied on ``set`` and ``get`` so a caller holding a
    returned list cannot change what the next ``get`` sees.
    """

    def __init__(self) -> None:
        self._store: dict[str, Any] = {}

    def get(self, key: str) -> Any | None:
        if key not in self._store:
            return None
        return copy.deepcopy(self._store[key])

    def set(self, key: str, value: Any) -> None:
        self._store[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def exists(self, key: str) -> bool:
        return key in self._store

    def clear(self) -> None:
        self._store.clear()

    def keys(self) -> list[str]:
        return list(self._store)

    def size(self) -> int:
        """Return current number of stored keys."""
        return len(self._store)


# ------------------------------------------------------------------ #
# SQLite Store
# ------------------------------------------------------------------ #

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key         TEXT PRIMARY KEY,
    value       BLOB NOT NULL,
    updated_at  TEXT NOT NULL
)
"""


class SqliteStore:
    """SQLite-backed store that persists across process restarts.

    Each call opens and closes its own connection. Values are encoded with
    :func:`recordkeep.core.wire.pack_value` before the write, so a value that
    cannot be serialized raises ``StorageError`` and leaves every entry,
    including the one at ``key``, untouched.

    Raises:
        StorageError: the database cannot be opened, read or written.
        ShapeMismatchError: ``get`` found bytes that do not deserialize.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with closing(sqlite3.connect(self.path)) as conn:
                conn.execute(_SCHEMA)
                with conn:
                    yield conn
        except (sqlite3.Error, OSError) as exc:
            raise StorageError(
                f"key-value store unavailable: {exc}", cause=exc
            ).with_context(path=str(self.path)) from exc

    def get(self, key: str) -> Any | None:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        return unpack_value(row[0])

    def set(self, key: str, value: Any) -> None:
        data = pack_value(value)
        with self._connect() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
                (key, data, to_iso8601(utc_now())),
            )
        logger.debug("store_set", key=key, size=len(data), path=str(self.path))

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))

    def exists(self, key: str) -> bool:
        with self._connect() as conn:
            row = conn.execute("SELECT 1 FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row is not None

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv_store")

    def keys(self) -> list[str]:
        with self._connect() as conn:
            rows = conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [row[0] for row in rows]


# ------------------------------------------------------------------ #
# Process-wide default
# ------------------------------------------------------------------ #

_default_store: KeyValueStore | None = None


def default_store() -> KeyValueStore:
    """Return the process-wide store selected by ``store_backend``."""
    global _default_store
    if _default_store is None:
        settings = get_settings()
        if settings.store_backend is StoreBackend.MEMORY:
            _default_store = InMemoryStore()
        else:
            _default_store = SqliteStore(settings.store_path)
        logger.debug("default_store_created", backend=settings.store_backend.value)
    return _default_store


def reset_default_store() -> None:
    """Forget the process-wide store (primarily for testing)."""
    global _default_store
    _default_store = None


__all__ = [
    "KeyValueStore",
    "InMemoryStore",
    "SqliteStore",
    "default_store",
    "reset_default_store",
]
