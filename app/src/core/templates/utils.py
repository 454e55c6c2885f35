import json
from datetime import UTC, datetime
from typing import Any

from src.core.config import settings


def utcnow() -> datetime:
    return datetime.now(UTC)


def setup_template_environment(env: Any):
    """Setup filters and globals for a Jinja2 environment."""

    env.filters["rawjson"] = json.dumps
    env.globals["SERVER_URL"] = settings.server_url
    env.globals["APP_NAME"] = settings.APP_NAME
    env.globals["APP_VERSION"] = settings.APP_VERSION
    env.globals["now"] = utcnow
