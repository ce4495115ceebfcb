"""
Structured logging configuration for LangScope.

LangScope is a library, so logging is set up for the ``langscope`` logger
namespace only: events are rendered by structlog and emitted through
standard library handlers attached to that namespace, leaving the root
logger to the host application.

Functions:
    setup_logging(): Initialize logging configuration
    get_logger(name): Get configured logger instance

Configuration:
    Logging behavior is controlled by environment variables:
    - LOG_LEVEL: Minimum log level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    - LOG_FORMAT: Output format (json/text)
    - LOG_FILE_PATH: Optional file output path
    - DEBUG / ENVIRONMENT: Rich console output in development

Example:
    >>> from langscope.core.logging.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Added language profile", language="en", ngrams=1843)
"""

import logging
import sys
from pathlib import Path
from typing import List

import structlog
from rich.console import Console
from rich.logging import RichHandler

from langscope.core.config.settings import settings

PACKAGE_LOGGER = "langscope"


def _processors() -> List:
    chain = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    # N-grams are mostly non-ASCII; keep them readable in JSON output
    if settings.LOG_FORMAT == "json":
        chain.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    else:
        chain.append(structlog.dev.ConsoleRenderer())
    return chain


def _handlers() -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    if settings.DEBUG or settings.ENVIRONMENT == "development":
        handlers.append(
            RichHandler(
                console=Console(stderr=True),
                show_time=True,
                show_level=True,
                show_path=True,
                markup=False,
                rich_tracebacks=True,
            )
        )
    else:
        handlers.append(logging.StreamHandler(sys.stdout))

    if settings.LOG_FILE_PATH:
        file_path = Path(settings.LOG_FILE_PATH)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(settings.LOG_LEVEL)
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def setup_logging() -> None:
    """
    Initialize logging configuration.

    Configures structlog and attaches handlers to the package logger:
        - Development/debug: Rich console handler on stderr
        - Otherwise: plain stream handler on stdout
        - File: additional handler when LOG_FILE_PATH is configured

    Handlers are attached once; calling this again only refreshes the
    structlog configuration and the package log level.
    """
    structlog.configure(
        processors=_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(settings.LOG_LEVEL)
    if not package_logger.handlers:
        for handler in _handlers():
            package_logger.addHandler(handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured structured logger instance.

    Args:
        name (str): Logger name, typically __name__ of the calling module

    Returns:
        structlog.stdlib.BoundLogger: Configured logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> table_logger = logger.bind(table="short-messages")
        >>> table_logger.info("Built probability table", languages=3)

    Note:
        If logging hasn't been configured yet, this function will
        automatically call setup_logging() to ensure proper initialization.
    """
    if not structlog.is_configured():
        setup_logging()
    return structlog.get_logger(name)


# Setup logging on import
setup_logging()
