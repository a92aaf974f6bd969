"""Structlog configuration for sharecell.

Events are rendered by structlog and handed to the standard-library
``sharecell`` logger, which stays silent (``NullHandler``) until
:func:`configure_logging` attaches a stderr handler.  Colored console
output when stderr is a terminal (or ``FORCE_COLOR`` is set), plain
console output otherwise, JSON on request.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

from sharecell.core.observability import LOGGER_NAME
from sharecell.exceptions import ConfigurationError

LOG_LEVELS: tuple[str, ...] = ("debug", "info", "warning", "error", "critical")

_handler: logging.Handler | None = None


def _resolve_level(level: str) -> int:
    """Map a level name to its numeric value or raise ConfigurationError."""
    normalized = level.strip().lower()
    if normalized not in LOG_LEVELS:
        raise ConfigurationError(
            f"Unknown log level: {level!r}",
            hint=f"Use one of: {', '.join(LOG_LEVELS)}",
        )
    return logging.getLevelName(normalized.upper())


def _detach_handler(logger: logging.Logger) -> None:
    global _handler
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None


def configure_logging(level: str = "warning", *, json: bool = False) -> None:
    """Configure structlog processors and the ``sharecell`` stderr handler."""
    global _handler
    numeric_level = _resolve_level(level)

    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = force_color or sys.stderr.isatty()

    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if json:
        processors: list[structlog.types.Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=use_colors),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logger = logging.getLogger(LOGGER_NAME)
    _detach_handler(logger)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(_handler)
    logger.setLevel(numeric_level)
    logger.propagate = False


def reset_logging() -> None:
    """Undo :func:`configure_logging`; sharecell goes silent again."""
    logger = logging.getLogger(LOGGER_NAME)
    _detach_handler(logger)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    structlog.reset_defaults()
