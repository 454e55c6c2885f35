"""
Structured logging for the Storefront API.

JSON records enriched with request context (request id, client ip, caller)
through `contextvars`, configured per environment.

Usage:
    from src.core.logging import get_logger, add_to_log_context

    logger = get_logger(__name__)

    with add_to_log_context(store_id="electronics"):
        logger.info("Updating store")
"""

from .config import get_logger, get_logging_config, setup_exception_logging, setup_logging
from .exceptions import log_exception_with_context
from .filters import add_to_log_context, clear_log_context, get_log_context

__all__ = [
    "setup_logging",
    "setup_exception_logging",
    "get_logger",
    "get_logging_config",
    "add_to_log_context",
    "get_log_context",
    "clear_log_context",
    "log_exception_with_context",
]
