"""Structured logging for amp.

Loggers are structlog loggers wrapping the standard library ``logging`` module,
so records go wherever the host application routes the ``amp`` logger. The
library installs no handler on import; applications (and the ``amp`` CLI) call
configure_logging() to get console or JSON output.

Environment Variables:
    AMP_LOG_FORMAT: Set to "json" for JSON output, "console" for plain console output
    AMP_LOG_LEVEL: Set log level (DEBUG, INFO, WARNING, ERROR)

Example:
    >>> from amp.logging import configure_logging, get_logger
    >>> configure_logging(log_format="json", log_level="DEBUG")
    >>> logger = get_logger("amp.codec.decoder")
    >>> logger.debug("message.decoded", field_count=4, consumed=58)
"""

from __future__ import annotations

import logging
import os
import sys

import structlog
from structlog.typing import Processor

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "console"

ENV_LOG_FORMAT = "AMP_LOG_FORMAT"
ENV_LOG_LEVEL = "AMP_LOG_LEVEL"

ROOT_LOGGER_NAME = "amp"

_handler: logging.Handler | None = None


def _get_log_level() -> str:
    """Get log level from environment or use default."""
    return os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()


def _get_log_format() -> str:
    """Get log format from environment or use default."""
    return os.environ.get(ENV_LOG_FORMAT, DEFAULT_LOG_FORMAT).lower()


def _get_shared_processors() -> list[Processor]:
    """Get processors shared by library loggers and the configured formatter."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]


def _get_renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=False,
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(
    log_format: str | None = None,
    log_level: str | None = None,
    force: bool = False,
) -> None:
    """Attach a structured stderr handler to the ``amp`` logger.

    Args:
        log_format: Output format - "json" or "console". Defaults to env var or "console"
        log_level: Minimum log level. Defaults to env var or "WARNING"
        force: If True, replace a handler installed by an earlier call

    Raises:
        ValueError: If log_level is not a known level name
    """
    global _handler

    if _handler is not None and not force:
        return

    log_format = log_format or _get_log_format()
    log_level = (log_level or _get_log_level()).upper()

    level = logging.getLevelName(log_level)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_get_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _get_renderer(log_format),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    amp_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if _handler is not None:
        amp_logger.removeHandler(_handler)
    amp_logger.addHandler(handler)
    amp_logger.setLevel(level)

    _handler = handler


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for the given name.

    Events below the stdlib logger's effective level are dropped before any
    processing, so debug events on hot paths cost one level check.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        Bound structlog logger

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.debug("message.encoded", field_count=3, size=42)
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            *_get_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )
