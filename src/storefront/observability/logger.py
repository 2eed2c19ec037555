"""Structured logging setup for the storefront.

structlog renders through the stdlib root handler, so modules that use
``logging.getLogger(__name__)`` and those that use :func:`get_logger`
end up in the same stream (stderr, keeping CLI stdout clean).
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from storefront.core.errors import ConfigError

# Driver loggers that are only interesting when SQL echo is requested.
_SQL_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncpg")


def _renderer(format: str) -> Any:
    if format == "json":
        return structlog.processors.JSONRenderer()
    if format == "console":
        return structlog.dev.ConsoleRenderer()
    raise ConfigError(f"Unknown log format {format!r}, expected 'json' or 'console'")


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    sql_echo: bool = False,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
        format: ``"json"`` for machine-readable lines, ``"console"`` for
            a coloured development view.
        sql_echo: Let SQL driver loggers through at *level*; otherwise
            they are held at WARNING.

    Safe to call more than once; the last call wins.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            _renderer(format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    sql_level = log_level if sql_echo else max(log_level, logging.WARNING)
    for name in _SQL_LOGGERS:
        logging.getLogger(name).setLevel(sql_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to *name*."""
    return structlog.get_logger(name)
