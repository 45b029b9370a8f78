"""Structured logging setup using structlog."""

import logging
import sys
from typing import Any, Literal

import structlog

FormatType = Literal["text", "json"]


def setup_logging(level: str = "INFO", format_type: FormatType = "text") -> None:
    """Configure structlog and the standard library root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        format_type: "text" for human-readable console output, "json" for
            one JSON object per line
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    renderer: Any
    if format_type == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with initial context.

    Args:
        name: Logger name, usually ``__name__``
        **context: Key-value pairs attached to every event

    Returns:
        Lazily configured structlog logger; configuration applied later by
        :func:`setup_logging` still takes effect
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name, **context)
    return logger
