"""Logging setup using structlog."""

import logging
import sys

import structlog
from structlog.types import Processor


def configure_logging(level: str = "WARNING", json_logs: bool = False) -> None:
    """Configure structlog for the command line tool.

    Log lines go to stderr so they never mix with a document written to stdout.

    Args:
        level: Minimum level name, e.g. "DEBUG" or "WARNING".
        json_logs: Emit JSON lines instead of the human-readable console format.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level.upper())),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
