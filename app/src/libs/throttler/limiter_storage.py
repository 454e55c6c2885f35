from limits.aio.storage.base import Storage
from limits.storage import storage_from_string
from src.core.config import settings


def get_limiter_storage(environment: str) -> Storage:
    """
    Get the rate limit storage for an environment.

    Local runs keep counters in memory, deployed environments share them through Redis.
    """
    storage_map: dict[str, str] = {
        "local": "async+memory://",
        "staging": f"async+{settings.THROTTLER_REDIS_URL}",
        "production": f"async+{settings.THROTTLER_REDIS_URL}",
    }

    if environment not in storage_map:
        raise ValueError(f"Invalid environment: {environment}")

    return storage_from_string(storage_map[environment])  # type: ignore[return-value]
