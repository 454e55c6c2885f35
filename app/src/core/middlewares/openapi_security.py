import base64
import binascii
import json
import secrets

from fastapi import Request, Response
from src.core.config import settings
from src.core.exceptions import errors
from src.core.logging import get_logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = get_logger(__name__)


class OpenAPISecurityMiddleware(BaseHTTPMiddleware):
    """
    Protects the API documentation with HTTP basic authentication.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        protected_paths: list[str],
        username: str = settings.OPENAPI_USERNAME,
        password: str = settings.OPENAPI_PASSWORD,
    ) -> None:
        super().__init__(app)

        self.protected_paths = {path.rstrip("/") for path in protected_paths}
        self.username = username
        self.password = password

    def _is_authorized(self, auth_header: str | None) -> bool:
        if not auth_header:
            return False

        auth_type, _, auth_value = auth_header.partition(" ")
        if auth_type.lower() != "basic" or not auth_value:
            return False

        try:
            username, _, password = base64.b64decode(auth_value).decode().partition(":")
        except (binascii.Error, UnicodeDecodeError):
            logger.warning(f"{__name__}.dispatch:: malformed basic Authorization header")
            return False

        return secrets.compare_digest(username, self.username) and secrets.compare_digest(password, self.password)

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path.rstrip("/") in self.protected_paths and not self._is_authorized(
            request.headers.get("Authorization")
        ):
            return self._unauthorized_response()

        return await call_next(request)

    def _unauthorized_response(self) -> Response:
        error = errors.UnauthorizedError()
        return Response(
            content=json.dumps(error.marshal(uri=f"{settings.server_url}/errors/{{type}}", strict=True)),
            status_code=error.status,
            headers={
                "content-type": "application/problem+json",
                "WWW-Authenticate": 'Basic realm="OpenAPI Documentation"',
            },
        )
