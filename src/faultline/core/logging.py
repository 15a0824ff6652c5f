"""
Faultline Logging - structured logging with error-aware processors.

This module configures structlog for applications that produce faultline
errors, and teaches the processor chain how to flatten an ``ErrorMessage``
or ``MultiError`` into searchable fields.

Manifesto:
    An error code that never reaches the log index is an error code nobody
    can alert on. Logging an error value should yield:

    - **Identity:** ``error.code`` (``DAS-1001``) as its own field
    - **Text:** ``error.message`` in Compact form
    - **Depth on demand:** ``error.stack_trace`` only when asked for

Architecture:
    ::

        logger.error("connect_failed", error=err, error_verbose=True)
              │
              ▼
        ┌────────────────────────────────────────────────────────────┐
        │ processor chain                                            │
        │   1. TimeStamper / add_log_level                           │
        │   2. _add_service_metadata                                 │
        │   3. error_fields   (ErrorMessage -> error.* fields)        │
        │   4. _elasticsearch_compatible (JSON only)                 │
        │   5. JSONRenderer or ConsoleRenderer                       │
        └────────────────────────────────────────────────────────────┘

        {"event": "connect_failed", "error.code": "DAS-1001",
         "error.message": "DAS-1001: failed to connect to db1: timeout",
         "error.stack_trace": "DAS-1001: ...\\n    app.py:12 in connect"}

Examples:
    >>> from faultline.core.logging import configure_logging, get_logger
    >>> configure_logging(level="INFO", json_format=True, service="billing")
    >>> logger = get_logger(__name__)
    >>> logger.error("charge_failed", error=err)

Guardrails:
    - Service name stored globally (set once at startup)
    - ECS-compatible field names for Elasticsearch
    - Sink configuration (files, rotation, shipping) is left to the host app

Tags:
    logging, structlog, observability, ecs, json-logging, faultline-core

Doc-Types:
    - API Reference
    - Observability Guide
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

# Store service name for metadata
_SERVICE_NAME = "faultline"


def _add_service_metadata(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service-level metadata to all logs."""
    event_dict.setdefault("service.name", _SERVICE_NAME)
    return event_dict


def _elasticsearch_compatible(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Make field names Elasticsearch/ECS compatible."""
    if "timestamp" in event_dict:
        event_dict["@timestamp"] = event_dict.pop("timestamp")

    if "level" in event_dict:
        event_dict["log.level"] = event_dict.pop("level")

    return event_dict


def error_fields(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Flatten a faultline error passed as ``error=`` into ``error.*`` fields.

    Other values under ``error`` are left untouched. Pass
    ``error_verbose=True`` to also attach the Verbose rendering.
    """
    from faultline.core.errors import ErrorMessage
    from faultline.core.formatting import RenderMode, render
    from faultline.core.multierror import MultiError

    verbose = event_dict.pop("error_verbose", False)
    err = event_dict.get("error")
    if not isinstance(err, (ErrorMessage, MultiError)):
        return event_dict

    event_dict.pop("error")
    if isinstance(err, ErrorMessage):
        event_dict["error.code"] = err.code
    else:
        event_dict["error.count"] = len(err)
    event_dict["error.message"] = render(err, RenderMode.COMPACT)
    if verbose:
        event_dict["error.stack_trace"] = render(err, RenderMode.VERBOSE)
    return event_dict


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "faultline",
    add_timestamp: bool = True,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_format: True for JSON, False for console, None for auto (JSON if not tty)
        service: Service name to include in logs
        add_timestamp: Include ISO timestamp in logs
    """
    global _SERVICE_NAME
    _SERVICE_NAME = service

    if json_format is None:
        json_format = not sys.stdout.isatty()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _add_service_metadata,
        error_fields,
    ]

    if add_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_format:
        shared_processors.append(_elasticsearch_compatible)
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )


def configure_from_settings() -> None:
    """Configure logging from ``FaultlineSettings``."""
    from faultline.core.settings import get_settings

    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.json_logs,
        service=settings.service,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger (usually ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context to include in all subsequent logs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def unbind_context(*keys: str) -> None:
    """Remove specific keys from logging context."""
    structlog.contextvars.unbind_contextvars(*keys)


def clear_context() -> None:
    """Clear all bound context."""
    structlog.contextvars.clear_contextvars()


class LogContext:
    """Context manager for scoped logging context.

    Example:
        with LogContext(header="DAS", request_id="abc123"):
            logger.warning("retrying")
    """

    def __init__(self, **kwargs: Any):
        self._context = kwargs

    def __enter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    def __exit__(self, *args) -> None:
        unbind_context(*self._context.keys())

    async def __aenter__(self) -> LogContext:
        bind_context(**self._context)
        return self

    async def __aexit__(self, *args) -> None:
        unbind_context(*self._context.keys())


__all__ = [
    "configure_logging",
    "configure_from_settings",
    "error_fields",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
]
