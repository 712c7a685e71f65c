"""
Runtime configuration for the glyphguard command-line tool.

Detection thresholds are fixed constants and are not configurable. What can
be configured is how much the tool says about its own work: the log level
comes from ``--verbose`` or the ``GLYPHGUARD_LOG_LEVEL`` environment
variable, and every log line goes to stderr so stdout stays clean for
cleaned text and JSON output.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

LOG_LEVEL_ENV = "GLYPHGUARD_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def resolve_log_level(verbose: bool = False) -> int:
    """Return the numeric log level for this run."""
    if verbose:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.WARNING
    return level


def configure_logging(verbose: bool = False) -> int:
    """
    Route structlog and stdlib logging to stderr at a single level.

    Library modules log through ``logging.getLogger(__name__)``; the CLI logs
    key/value events through structlog. Returns the level that was applied.
    """
    level = resolve_log_level(verbose)

    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    return level
