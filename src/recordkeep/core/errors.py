"""
Structured error types for recordkeep.

Provides a small hierarchy of typed errors that carry a category, structured
context and an optional chained cause, so failures can be logged as key/value
events instead of bare strings.

Manifesto:
    - **Typed Error Hierarchy:** Decode, schema, storage and config failures
      are distinct types
    - **Rich Context:** Errors carry the record type, key, path, field and
      batch index involved
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                      RecordkeepError                          │
        │                 (category, context, cause)                    │
        ├──────────────────────────────────────────────────────────────┤
        │                                                               │
        │  ValidationError        StorageError         ConfigError      │
        │  (VALIDATION)           (STORAGE)            (CONFIG)         │
        │       │                      │                                │
        │  DecodeError            PathResolutionError                   │
        │  SchemaError            ShapeMismatchError (PARSE)            │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> error = DecodeError("missing field", record_type="SampleRecord",
    ...                     problems={"int": "missing"})
    >>> error.category
    <ErrorCategory.VALIDATION: 'VALIDATION'>
    >>> error.problems
    {'int': 'missing'}

    >>> StorageError("write failed").with_context(path="/tmp/x.dat").context.path
    '/tmp/x.dat'

Tags:
    error-handling, exception-hierarchy, error-context, recordkeep

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """
    Standard error categories for classification and log routing.

    Attributes:
        VALIDATION: Record values or mappings that do not match a schema
        PARSE: Stored bytes or values that cannot be read back
        STORAGE: Disk, path and key-value store errors
        CONFIG: Missing or invalid settings
        INTERNAL: Bugs, unexpected state
    """

    VALIDATION = "VALIDATION"
    PARSE = "PARSE"
    STORAGE = "STORAGE"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured context attached to an error.

    Only non-``None`` attributes appear in :meth:`to_dict`, so the dict can be
    splatted straight into a structlog event.
    """

    record_type: str | None = None
    key: str | None = None
    path: str | None = None
    field_name: str | None = None
    index: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["record_type", "key", "path", "field_name", "index"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RecordkeepError(Exception):
    """
    Base exception for all recordkeep errors.

    All instances carry:
    - **category:** ErrorCategory for classification
    - **context:** ErrorContext with structured metadata
    - **cause:** Optional underlying exception, also set as ``__cause__``

    Subclasses set ``default_category``.

    Examples:
        >>> error = RecordkeepError("Something went wrong")
        >>> error.category
        <ErrorCategory.INTERNAL: 'INTERNAL'>
        >>> error.to_dict()["error_type"]
        'RecordkeepError'
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RecordkeepError:
        """
        Add context to this error (fluent API).

        Usage:
            raise StorageError("Failed").with_context(path=str(path))
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(RecordkeepError):
    """Field values that do not match a record's schema."""

    default_category = ErrorCategory.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        record_type: str | None = None,
        problems: Mapping[str, str] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.problems: dict[str, str] = dict(problems or {})
        if record_type is not None:
            self.context.record_type = record_type

    @property
    def record_type(self) -> str | None:
        return self.context.record_type

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.problems:
            result["problems"] = dict(self.problems)
        return result


class DecodeError(ValidationError):
    """A Record Mapping could not be decoded into a record.

    Returned inside ``Err`` by ``decode``; only raised by strict batch decoding.
    """


class SchemaError(ValidationError):
    """A record class whose fields cannot be described as Field Values."""


# =============================================================================
# STORAGE ERRORS
# =============================================================================


class StorageError(RecordkeepError):
    """Storage-related error (disk, key-value store, serialization)."""

    default_category = ErrorCategory.STORAGE


class PathResolutionError(StorageError):
    """A file name that does not resolve inside the data directory."""


class ShapeMismatchError(StorageError):
    """Stored data that is not a sequence of Record Mappings."""

    default_category = ErrorCategory.PARSE


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(RecordkeepError):
    """Configuration error (invalid settings)."""

    default_category = ErrorCategory.CONFIG


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RecordkeepError",
    "ValidationError",
    "DecodeError",
    "SchemaError",
    "StorageError",
    "PathResolutionError",
    "ShapeMismatchError",
    "ConfigError",
]
