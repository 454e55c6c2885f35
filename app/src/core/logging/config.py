import logging
import logging.config
import sys
from pathlib import Path
from typing import Any

import yaml
from src.core.config import settings


def get_logging_config() -> dict[str, Any]:
    """
    Build the `dictConfig` for the current environment.

    Local runs log compact JSON to stdout, every other environment logs the
    production format to stdout with errors duplicated on stderr.

    Returns:
        Dictionary containing the complete logging configuration
    """
    is_local = settings.ENVIRONMENT == "local"

    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "context_filter": {
                "()": "src.core.logging.filters.ContextFilter",
            },
            "noise_reduction": {
                "()": "src.core.logging.filters.NoiseReductionFilter",
                "suppress_patterns": ["/health", "/ping"],
            },
            "request_id": {
                "()": "src.core.logging.filters.RequestIdFilter",
            },
        },
        "root": {
            "level": "WARNING",
            "handlers": [],
        },
    }

    if is_local:
        config["formatters"] = {
            "console": {
                "()": "src.core.logging.formatters.ConsoleFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        }
        config["handlers"] = {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG",
                "formatter": "console",
                "filters": ["context_filter", "request_id"],
                "stream": "ext://sys.stdout",
            },
        }
        config["root"]["handlers"] = ["console"]
    else:
        config["formatters"] = {
            "production": {
                "()": "src.core.logging.formatters.ProductionFormatter",
            },
        }
        config["handlers"] = {
            "json_stdout": {
                "class": "logging.StreamHandler",
                "level": "INFO",
                "formatter": "production",
                "filters": ["context_filter", "request_id", "noise_reduction"],
                "stream": "ext://sys.stdout",
            },
            "error_stderr": {
                "class": "logging.StreamHandler",
                "level": "ERROR",
                "formatter": "production",
                "filters": ["context_filter", "request_id"],
                "stream": "ext://sys.stderr",
            },
        }
        config["root"]["handlers"] = ["json_stdout", "error_stderr"]

    config["loggers"] = {
        "src": {
            "level": "DEBUG" if is_local else "INFO",
            "handlers": config["root"]["handlers"],
            "propagate": False,
        },
        "fastapi": {"level": "INFO", "propagate": True},
        "uvicorn": {"level": "INFO", "propagate": True},
        # request lifecycle is logged by RequestUtilsMiddleware
        "uvicorn.access": {"level": "WARNING", "propagate": False},
        "sqlalchemy": {"level": "WARNING", "propagate": True},
        "sqlalchemy.engine": {"level": "INFO" if is_local else "WARNING", "propagate": True},
        "celery": {"level": "INFO", "propagate": True},
    }

    return config


def load_config_from_yaml(config_path: Path) -> dict[str, Any] | None:
    """
    Load a logging configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        The parsed configuration, or None if the file is missing or unreadable
    """
    if not config_path.exists():
        return None

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        return None


def setup_logging(config_override: dict[str, Any] | None = None) -> None:
    """
    Configure logging for the application.

    Resolution order: explicit override, `config/logging.<env>.yaml`,
    `config/logging.yaml`, then the programmatic configuration.

    Args:
        config_override: Optional dictionary replacing every other source
    """
    config = config_override

    if config is None:
        config_dir = Path(settings.BASE_DIR) / "config"
        config = load_config_from_yaml(config_dir / f"logging.{settings.ENVIRONMENT}.yaml") or load_config_from_yaml(
            config_dir / "logging.yaml"
        )

    if config is None:
        config = get_logging_config()

    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        print(f"Failed to configure logging: {e}", file=sys.stderr)
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            handlers=[logging.StreamHandler(sys.stdout)],
        )


def setup_exception_logging() -> None:
    """
    Install an excepthook that logs uncaught exceptions before the process dies.
    """
    original_excepthook = sys.excepthook

    def handle_uncaught_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, (KeyboardInterrupt, SystemExit)):
            original_excepthook(exc_type, exc_value, exc_traceback)
            return

        logging.getLogger(__name__).critical(
            "Uncaught exception, application will terminate",
            exc_info=(exc_type, exc_value, exc_traceback),
            extra={"event_type": "uncaught_exception"},
        )

        original_excepthook(exc_type, exc_value, exc_traceback)

    sys.excepthook = handle_uncaught_exception


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name (typically `__name__`).
    """
    return logging.getLogger(name)
