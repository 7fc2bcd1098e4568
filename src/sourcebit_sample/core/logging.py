# src/sourcebit_sample/core/logging.py
"""Structured logging setup.

Lifecycle events (bootstrap, transform, plugin log() calls) go through
structlog. The CLI calls configure_logging() once; library code only calls
get_logger().
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(*, verbose: bool = False, json_output: bool = False) -> None:
    """Configure structlog for the process.

    Args:
        verbose: Emit INFO-level events (plugin log() messages). WARNING otherwise.
        json_output: Render events as JSON lines instead of console output
    """
    level = logging.INFO if verbose else logging.WARNING
    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Get a structlog logger, optionally bound with context values."""
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger
