import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from src.core.constants import DEFAULT_PROXY_COUNT, DEFAULT_PROXY_HEADERS, REQUEST_ID_CTX
from src.core.exceptions import errors
from src.core.helpers.request import get_client_ip, get_user_agent
from src.core.logging import add_to_log_context, get_logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = get_logger(__name__)

MAX_REQUEST_ID_LENGTH = 200


class RequestUtilsMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id and client details, and logs its lifecycle.

    The request id, client ip and user agent are stored on `request.state` and
    added to the logging context for the duration of the request. Responses carry
    `X-Request-ID` and `X-Process-Time` headers.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        trust_request_id: bool = False,
        request_id_generator: Callable[[], str] = lambda: uuid.uuid4().hex,
        trusted_proxies: list[str] | None = None,
        proxy_count: int | None = None,
        proxy_headers: list[str] | None = None,
        enable_request_logging: bool = True,
    ) -> None:
        super().__init__(app)

        self.trust_request_id = trust_request_id
        self.request_id_generator = request_id_generator
        self.trusted_proxies = trusted_proxies or []
        self.proxy_count = proxy_count or DEFAULT_PROXY_COUNT
        self.proxy_headers = proxy_headers or DEFAULT_PROXY_HEADERS
        self.enable_request_logging = enable_request_logging

    async def dispatch(self, request: Request, call_next: Any) -> Response:
        request_id = self._get_request_id(request)
        REQUEST_ID_CTX.set(request_id)

        client_ip = get_client_ip(
            request,
            proxy_headers=self.proxy_headers,
            trusted_proxies=self.trusted_proxies,
            proxy_count=self.proxy_count,
        )
        user_agent = get_user_agent(request)

        request.state.request_id = request_id
        request.state.client_ip = client_ip
        request.state.user_agent = user_agent

        start_time = time.perf_counter()

        with add_to_log_context(
            request_id=request_id,
            client_ip=client_ip,
            user_agent=user_agent,
            method=request.method,
            path=request.url.path,
        ):
            if self.enable_request_logging:
                logger.info(
                    "Incoming %s request to %s",
                    request.method,
                    request.url.path,
                    extra={
                        "event_type": "request_start",
                        "query_string": str(request.query_params) if request.query_params else None,
                        "content_type": request.headers.get("content-type"),
                    },
                )

            try:
                response = await call_next(request)
            except Exception as exc:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(
                    "Request processing failed for %s %s after %.2fms",
                    request.method,
                    request.url.path,
                    duration_ms,
                    exc_info=True,
                    extra={
                        "event_type": "request_error",
                        "duration_ms": duration_ms,
                        "exception_type": type(exc).__name__,
                    },
                )
                raise errors.InternalServerError() from exc

            process_time = time.perf_counter() - start_time
            response.headers["X-Process-Time"] = f"{process_time:.6f}"
            response.headers["X-Request-ID"] = request_id

            if self.enable_request_logging:
                logger.log(
                    self._get_log_level_for_status(response.status_code),
                    "%s request to %s completed with status %d in %.2fms",
                    request.method,
                    request.url.path,
                    response.status_code,
                    process_time * 1000,
                    extra={
                        "event_type": "request_complete",
                        "status_code": response.status_code,
                        "duration_ms": process_time * 1000,
                    },
                )

            return response

    def _get_request_id(self, request: Request) -> str:
        if self.trust_request_id:
            incoming_id = request.headers.get("X-Request-ID")
            if incoming_id and self._validate_request_id(incoming_id):
                return incoming_id
        return self.request_id_generator()

    def _validate_request_id(self, request_id: str) -> bool:
        """Printable ASCII only, bounded in length, no surrounding whitespace."""
        return (
            len(request_id) <= MAX_REQUEST_ID_LENGTH
            and all(32 <= ord(c) <= 126 for c in request_id)
            and request_id.strip() == request_id
        )

    def _get_log_level_for_status(self, status_code: int) -> int:
        if status_code >= 500:
            return logging.ERROR
        if status_code >= 400:
            return logging.WARNING
        return logging.INFO
