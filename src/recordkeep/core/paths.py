"""Application data directory, file-name resolution and atomic writes."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from recordkeep.core.errors import PathResolutionError
from recordkeep.core.logging import get_logger
from recordkeep.core.settings import get_settings

logger = get_logger(__name__)


def app_data_dir() -> Path:
    """Directory that holds every file written by the file backend."""
    return get_settings().data_dir


def resolve_path(directory: Path, name: str) -> Path:
    """
    Join ``name`` onto ``directory``, refusing anything that escapes it.

    ``name`` may contain sub-directories (``"exports/MyData.dat"``) but must be
    relative and must not climb out with ``..``.

    Raises:
        PathResolutionError: empty, absolute or escaping names, or names
            holding a NUL byte.
    """
    if not name or not name.strip():
        raise PathResolutionError("file name is empty")
    if "\x00" in name:
        raise PathResolutionError(f"file name contains a NUL byte: {name!r}").with_context(path=name)
    if Path(name).is_absolute():
        raise PathResolutionError(f"file name must be relative: {name!r}").with_context(path=name)

    base = directory.resolve()
    candidate = (base / name).resolve()
    if candidate == base or not candidate.is_relative_to(base):
        raise PathResolutionError(
            f"file name resolves outside the data directory: {name!r}"
        ).with_context(path=str(candidate))
    return candidate


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Atomically write bytes to a path using a temporary file and replace.

    Either the old file remains or the new file fully replaces it; the
    temporary file is removed when anything fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            try:
                os.remove(tmp_name)
            except OSError:
                logger.debug("temp_file_cleanup_failed", path=tmp_name, exc_info=True)


__all__ = ["app_data_dir", "resolve_path", "atomic_write_bytes"]
