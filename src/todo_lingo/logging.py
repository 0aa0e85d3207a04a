"""Structured logging configuration for todo-lingo.

Uses structlog for structured, context-rich logging that supports
both human-readable console output and machine-readable JSON format.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from todo_lingo.config import Settings


def configure_logging(settings: "Settings | None" = None) -> None:
    """Configure structured logging based on settings.

    Args:
        settings: Application settings. If None, uses defaults.
    """
    log_level = logging.WARNING
    log_format = "console"

    if settings is not None:
        log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
        log_format = settings.log_format

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # Standard library logging for third-party libs
    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Optional logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name) if name else structlog.get_logger()


class Loggers:
    """Pre-configured logger instances for todo-lingo components."""

    @staticmethod
    def cli() -> structlog.stdlib.BoundLogger:
        """Logger for CLI components."""
        return get_logger("todo_lingo.cli")

    @staticmethod
    def store() -> structlog.stdlib.BoundLogger:
        """Logger for the task store."""
        return get_logger("todo_lingo.tasks")

    @staticmethod
    def storage() -> structlog.stdlib.BoundLogger:
        """Logger for storage adapters."""
        return get_logger("todo_lingo.storage")

    @staticmethod
    def translation() -> structlog.stdlib.BoundLogger:
        """Logger for the translation client and cache."""
        return get_logger("todo_lingo.translation")

    @staticmethod
    def config() -> structlog.stdlib.BoundLogger:
        """Logger for configuration."""
        return get_logger("todo_lingo.config")
