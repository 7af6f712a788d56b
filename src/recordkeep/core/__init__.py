"""recordkeep.core -- record codec contract and persistence backends.

Architecture::

    Layer 1 -- Type System & Errors
        errors.py          Structured error hierarchy (RecordkeepError, DecodeError)
        result.py          Result[T] envelope (Ok / Err / try_result)
        fields.py          FieldKind tagged union, FieldValue / RecordMapping aliases
        timestamps.py      UTC + ISO 8601 helpers (stdlib-only)

    Layer 2 -- Codec
        codec.py           Codec protocol, Record base class, validate_mapping
        batch.py           encode_all / decode_all / decode_report

    Layer 3 -- Storage
        wire.py            msgpack encoding of mapping sequences
        stores.py          KeyValueStore protocol, InMemoryStore, SqliteStore
        paths.py           Data directory, name resolution, atomic writes
        backends.py        KeyValueBackend, FileBackend, save/load helpers

    Layer 4 -- Cross-Cutting Concerns
        logging.py         Structured logging (structlog)
        settings.py        RecordkeepSettings (pydantic-settings)

Tags:
    recordkeep, codec, persistence, module-index
"""

from recordkeep.core.errors import (
    ConfigError,
    DecodeError,
    ErrorCategory,
    ErrorContext,
    PathResolutionError,
    RecordkeepError,
    SchemaError,
    ShapeMismatchError,
    StorageError,
    ValidationError,
)
from recordkeep.core.result import Err, Ok, Result, try_result
from recordkeep.core.fields import FieldKind, FieldValue, RecordMapping
from recordkeep.core.codec import Codec, Record, RecordField, validate_mapping
from recordkeep.core.batch import (
    DecodeReport,
    decode_all,
    decode_report,
    decode_results,
    encode_all,
)
from recordkeep.core.stores import (
    InMemoryStore,
    KeyValueStore,
    SqliteStore,
    default_store,
    reset_default_store,
)
from recordkeep.core.backends import (
    FileBackend,
    KeyValueBackend,
    load_from_file,
    load_from_store,
    save_to_file,
    save_to_store,
)

__all__ = [
    # errors
    "ConfigError",
    "DecodeError",
    "ErrorCategory",
    "ErrorContext",
    "PathResolutionError",
    "RecordkeepError",
    "SchemaError",
    "ShapeMismatchError",
    "StorageError",
    "ValidationError",
    # result
    "Err",
    "Ok",
    "Result",
    "try_result",
    # fields / codec
    "FieldKind",
    "FieldValue",
    "RecordMapping",
    "Codec",
    "Record",
    "RecordField",
    "validate_mapping",
    # batch
    "DecodeReport",
    "decode_all",
    "decode_report",
    "decode_results",
    "encode_all",
    # stores / backends
    "InMemoryStore",
    "KeyValueStore",
    "SqliteStore",
    "default_store",
    "reset_default_store",
    "FileBackend",
    "KeyValueBackend",
    "load_from_file",
    "load_from_store",
    "save_to_file",
    "save_to_store",
]
