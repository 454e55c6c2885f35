import time
from dataclasses import dataclass

from limits import RateLimitItem, parse
from limits.aio.storage.base import Storage
from limits.aio.strategies import MovingWindowRateLimiter
from src.core.config import settings
from src.libs.throttler.limiter_storage import get_limiter_storage


@dataclass(frozen=True)
class RateLimitStatus:
    """Outcome of a rate limited hit."""

    allowed: bool
    limit: int
    remaining: int
    reset_time: float

    @property
    def retry_after(self) -> int:
        return max(1, int(self.reset_time - time.time()))

    def headers(self) -> dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(int(self.reset_time)),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.retry_after)
        return headers


class LimiterConfig:
    """
    Moving window rate limiter with per-namespace limits.
    """

    def __init__(
        self,
        environment: str,
        default_limit: str = "100/minute",
        namespace_limits: dict[str, str] | None = None,
    ) -> None:
        self.environment = environment
        self.default_limit = default_limit
        self.namespace_limits = namespace_limits or {}
        self.storage: Storage = get_limiter_storage(environment)
        self.rate_limiter = MovingWindowRateLimiter(self.storage)

    def _get_limit(self, namespace: str, custom_limit: str | None = None) -> RateLimitItem:
        return parse(custom_limit or self.namespace_limits.get(namespace, self.default_limit))

    async def hit(self, namespace: str, client_key: str, custom_limit: str | None = None) -> RateLimitStatus:
        """
        Count a request from `client_key` against the namespace limit.

        Returns:
            RateLimitStatus: Whether the request is allowed and the window statistics
        """
        limit_item = self._get_limit(namespace, custom_limit)
        key = f"{namespace}:{client_key}"

        allowed = await self.rate_limiter.hit(limit_item, key)
        stats = await self.rate_limiter.get_window_stats(limit_item, key)

        return RateLimitStatus(
            allowed=allowed,
            limit=limit_item.amount,
            remaining=0 if not allowed else stats.remaining,
            reset_time=stats.reset_time,
        )


limiter = LimiterConfig(
    environment=settings.ENVIRONMENT,
    default_limit=f"{settings.RATE_LIMIT_PER_MINUTE}/minute",
)
