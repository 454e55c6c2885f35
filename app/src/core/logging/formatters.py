import traceback
from typing import Any

from pythonjsonlogger.json import JsonFormatter

CONSOLE_RENAME_FIELDS = {
    "levelname": "level",
    "asctime": "timestamp",
    "name": "logger",
}

PRODUCTION_RENAME_FIELDS = {
    **CONSOLE_RENAME_FIELDS,
    "pathname": "file_path",
    "lineno": "line_number",
    "funcName": "function_name",
    "process": "process_id",
    "thread": "thread_id",
}


class StructuredExceptionJsonFormatter(JsonFormatter):
    """
    JSON formatter that turns `exc_info` into a structured `exception` object
    instead of a flat traceback string.
    """

    def __init__(self, **kwargs: Any) -> None:
        # dictConfig passes the format string as `format`
        fmt = kwargs.pop("format", kwargs.pop("fmt", None))
        kwargs = {k: v for k, v in kwargs.items() if v is not None}
        super().__init__(fmt=fmt, **kwargs)

    def add_fields(self, log_record: dict[str, Any], record: Any, message_dict: dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        if not record.exc_info:
            return

        exc_type, exc_value, exc_traceback = record.exc_info

        log_record["exception"] = {
            "type": exc_type.__name__ if exc_type else None,
            "message": str(exc_value) if exc_value else None,
            "traceback": (
                traceback.format_exception(exc_type, exc_value, exc_traceback) if exc_traceback else None
            ),
        }

        log_record.pop("exc_info", None)
        log_record.pop("exc_text", None)


class ConsoleFormatter(JsonFormatter):
    """Compact JSON output for local development."""

    def __init__(self, **kwargs: Any) -> None:
        fmt = kwargs.pop("format", "%(asctime)s %(name)s %(levelname)s %(message)s")
        datefmt = kwargs.pop("datefmt", "%Y-%m-%d %H:%M:%S")
        rename_fields = {**CONSOLE_RENAME_FIELDS, **kwargs.pop("rename_fields", {})}

        super().__init__(fmt=fmt, datefmt=datefmt, rename_fields=rename_fields, **kwargs)


class ProductionFormatter(StructuredExceptionJsonFormatter):
    """Full-fidelity JSON output for staging and production."""

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault(
            "format",
            "%(asctime)s %(name)s %(levelname)s %(message)s "
            "%(pathname)s %(lineno)d %(funcName)s %(process)d %(thread)d",
        )
        kwargs.setdefault("datefmt", "%Y-%m-%dT%H:%M:%S")
        kwargs["rename_fields"] = {**PRODUCTION_RENAME_FIELDS, **kwargs.get("rename_fields", {})}

        super().__init__(**kwargs)
