"""
Structured logging setup

structlog on top of stdlib logging, configured once per process.
Level comes from PROPTYPES_LOG_LEVEL unless passed explicitly.
"""

import logging
import os
import sys

import structlog
from structlog.processors import JSONRenderer

_INITIALIZED = False


def get_log_level() -> str:
    """Log level from the environment"""
    return os.getenv("PROPTYPES_LOG_LEVEL", "WARNING").upper()


def configure_logging(level: str | None = None, json_format: bool = False) -> None:
    """
    Configure structured logging.

    Args:
        level: Log level name (environment value if None)
        json_format: Render events as JSON lines instead of console output
    """
    global _INITIALIZED

    if level is None:
        level = get_log_level()

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # Diagnostics go to stderr so rewritten-file reports on stdout stay clean
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=getattr(logging, level, logging.WARNING), force=True)
    _INITIALIZED = True


def get_logger(name: str):
    """
    Get a structured logger, configuring logging on first use.

    Args:
        name: Logger name (usually __name__)
    """
    if not _INITIALIZED:
        configure_logging()
    return structlog.get_logger(name)
