"""
Structured logging for recordkeep.

Modules log named events with key/value context instead of formatted text::

    logger = get_logger(__name__)
    logger.error("file_save_failed", name=name, error=str(exc))

``configure_logging`` is called once by the CLI with the values of
``RECORDKEEP_LOG_LEVEL`` / ``RECORDKEEP_JSON_LOGS``. Library code never
configures logging itself; without a call, structlog's defaults apply.

Processor chain:
    ::

        TimeStamper(iso) → merge_contextvars → add_log_level
          → add_logger_name → service name → exc_info
          → [ECS field names] → JSONRenderer | ConsoleRenderer

    JSON mode (the default when stdout is not a TTY) renames ``timestamp`` and
    ``level`` to ``@timestamp`` and ``log.level`` for log shippers. Output goes
    to stderr so CLI tables on stdout stay clean.

Tags:
    logging, structlog, observability, recordkeep

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

_ECS_FIELD_NAMES = {"timestamp": "@timestamp", "level": "log.level"}


def _service_name(service: str) -> Processor:
    def add_service_name(
        logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("service.name", service)
        return event_dict

    return add_service_name


def _ecs_field_names(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    for name, ecs_name in _ECS_FIELD_NAMES.items():
        if name in event_dict:
            event_dict[ecs_name] = event_dict.pop(name)
    return event_dict


def build_processors(json_format: bool, service: str = "recordkeep") -> list[Processor]:
    """Processor chain used by :func:`configure_logging`, renderer last."""
    processors: list[Processor] = [
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _service_name(service),
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]
    if json_format:
        processors += [
            structlog.processors.format_exc_info,
            _ecs_field_names,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return processors


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "recordkeep",
) -> None:
    """Configure structlog for the process.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_format: True for JSON, False for console, None for JSON unless
            stdout is a TTY
        service: Value of the ``service.name`` field
    """
    if json_format is None:
        json_format = not sys.stdout.isatty()

    structlog.configure(
        processors=build_processors(json_format, service),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Add key/value pairs to every later event in this context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Bind context for the duration of a ``with`` block.

    Values bound by an enclosing block are restored on exit.

    Example:
        with LogContext(backend="file", name="MyData.dat"):
            logger.info("save_started")
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> LogContext:
        self._tokens = structlog.contextvars.bind_contextvars(**self._context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)


__all__ = [
    "build_processors",
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "LogContext",
]
