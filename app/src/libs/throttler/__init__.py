from .limiter_config import LimiterConfig, RateLimitStatus, limiter  # noqa: F401
from .limiter_storage import get_limiter_storage  # noqa: F401
