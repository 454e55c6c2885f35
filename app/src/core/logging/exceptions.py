import logging
from typing import Any

from src.core.logging.filters import get_log_context

logger = logging.getLogger(__name__)


def log_exception_with_context(
    exc: Exception,
    message: str = "Exception occurred",
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """
    Log an exception together with the current logging context.

    Args:
        exc: The exception to log
        message: Message prefix
        level: Logging level
        extra_context: Additional fields merged into the record
    """
    log_extra = {
        "event_type": "exception",
        "exception_type": type(exc).__name__,
        "exception_message": str(exc),
        **get_log_context(),
    }

    if extra_context:
        log_extra.update(extra_context)

    logger.log(
        level,
        "%s: %s - %s",
        message,
        type(exc).__name__,
        str(exc),
        exc_info=exc,
        extra=log_extra,
    )
