"""
LangScope Logging Module - Structured Application Logging.

Structured key/value logging built on structlog, with rich console output
in development and JSON output elsewhere. Every module obtains its logger
through get_logger(__name__).

Example:
    >>> from langscope.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Detector created", languages=55)
"""

from langscope.core.logging.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
