"""Structured logging configuration for nunit_results."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, TextIO

import structlog

from nunit_results.config import Settings, get_settings

if TYPE_CHECKING:
    from structlog.typing import EventDict, WrappedLogger

DEFAULT_LOG_LEVEL = "WARNING"


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Render the bound ``logger_name`` as ``logger`` at the front of the event."""
    name = event_dict.pop("logger_name", None)
    if name:
        return {"logger": name, **event_dict}
    return event_dict


def configure_logging(
    log_level: str = DEFAULT_LOG_LEVEL,
    json_format: bool = True,
    stream: TextIO | None = None,
) -> None:
    """
    Configure structured logging with structlog.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON format; otherwise, console format.
        stream: Output stream (defaults to sys.stderr).
    """
    if stream is None:
        stream = sys.stderr

    processors: list = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.WARNING)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,  # Disable caching for tests
    )


def configure_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from environment settings.

    Args:
        settings: Settings to use; defaults to ``get_settings()``.
    """
    if settings is None:
        settings = get_settings()
    configure_logging(log_level=settings.log_level, json_format=settings.log_json_format)


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured logger instance.

    When structlog has not been configured yet, configures it from the
    ``NUNIT_RESULTS_LOG_LEVEL`` and ``NUNIT_RESULTS_LOG_JSON_FORMAT`` settings.

    Args:
        name: Logger name (typically module name).

    Returns:
        Lazy structlog logger; it picks up later ``configure_logging`` calls.
    """
    if not structlog.is_configured():
        configure_from_settings()
    return structlog.get_logger(logger_name=name)
