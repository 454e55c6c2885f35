import contextvars
import logging
import os
import socket
import uuid
from contextlib import contextmanager
from typing import Any

_log_context: contextvars.ContextVar[dict[str, Any]] = contextvars.ContextVar("log_context", default={})


class ContextFilter(logging.Filter):
    """
    Enriches every record with static process information and with whatever
    the current request put into the logging context.
    """

    def __init__(self, name: str = "") -> None:
        super().__init__(name)

        self.hostname = socket.gethostname()
        self.process_id = os.getpid()
        self.environment = os.getenv("ENVIRONMENT", "local")
        self.app_name = os.getenv("APP_NAME", "storefront-api")

    def filter(self, record: logging.LogRecord) -> bool:
        record.hostname = self.hostname
        record.process_id = self.process_id
        record.environment = self.environment
        record.app_name = self.app_name

        for key, value in _log_context.get().items():
            setattr(record, key, value)

        return True


class NoiseReductionFilter(logging.Filter):
    """
    Drops records whose message contains one of the suppressed patterns
    (health checks and the like).
    """

    def __init__(
        self,
        name: str = "",
        suppress_patterns: list[str] | None = None,
        suppress_loggers: list[str] | None = None,
    ) -> None:
        super().__init__(name)
        self.suppress_patterns = suppress_patterns or ["/health", "/ping"]
        self.suppress_loggers = suppress_loggers or []

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name in self.suppress_loggers:
            return False

        message = record.getMessage()
        return not any(pattern in message for pattern in self.suppress_patterns)


class RequestIdFilter(logging.Filter):
    """Guarantees a `request_id` attribute, minting one outside of requests."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = _log_context.get()

        if "request_id" not in context:
            request_id = uuid.uuid4().hex
            _log_context.set({**context, "request_id": request_id})
            record.request_id = request_id
        else:
            record.request_id = context["request_id"]

        return True


@contextmanager
def add_to_log_context(**kwargs: Any):
    """
    Temporarily add key/values to every record logged inside the block.

    Example:
        with add_to_log_context(store_id="electronics"):
            logger.info("Store updated")
    """
    token = _log_context.set({**_log_context.get(), **kwargs})

    try:
        yield
    finally:
        _log_context.reset(token)


def get_log_context() -> dict[str, Any]:
    return _log_context.get()


def clear_log_context() -> None:
    _log_context.set({})
