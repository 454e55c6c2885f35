import json
from typing import Callable

from fastapi import Request, Response
from limits.errors import StorageError
from src.core.config import settings
from src.core.exceptions import errors
from src.core.helpers.request import get_client_ip
from src.core.logging import get_logger
from src.libs.throttler import limiter
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = get_logger(__name__)


class RequestThrottlerMiddleware(BaseHTTPMiddleware):
    """
    Applies the application wide rate limit to every request.

    Requests are let through unthrottled when the limiter storage is unavailable.
    """

    def __init__(
        self,
        app: ASGIApp,
        namespace: str | None = None,
        custom_limit: str | None = None,
        key_func: Callable[[Request], str] | None = None,
        exempt_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.namespace = namespace or settings.RATE_LIMIT_NAMESPACE
        self.custom_limit = custom_limit
        self.key_func = key_func or self._default_key_func
        self.exempt_paths = set(exempt_paths or [])

    def _default_key_func(self, request: Request) -> str:
        return get_client_ip(request) or "unknown"

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_key = self.key_func(request)

        try:
            status = await limiter.hit(namespace=self.namespace, client_key=client_key, custom_limit=self.custom_limit)
        except StorageError:
            logger.exception(f"{__name__}.dispatch:: rate limit storage unavailable, skipping throttling")
            return await call_next(request)

        if not status.allowed:
            logger.warning(
                f"Rate limit exceeded for client {client_key} in namespace {self.namespace}",
                extra={"event_type": "rate_limited", "reset_time": status.reset_time},
            )
            error = errors.RateLimitExceededError()
            return Response(
                content=json.dumps(error.marshal(uri=f"{settings.server_url}/errors/{{type}}", strict=True)),
                status_code=error.status,
                headers={"Content-Type": "application/problem+json", **status.headers()},
            )

        response = await call_next(request)
        response.headers.update(status.headers())
        return response
