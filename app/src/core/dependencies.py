from functools import lru_cache
from collections.abc import Coroutine
from typing import Annotated, Any, Callable

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from multidict import CIMultiDict
from sqlmodel.ext.asyncio.session import AsyncSession
from src.core.config import settings
from src.core.database.session import get_db_session
from src.core.exceptions import errors
from src.core.helpers.request import get_client_ip
from src.domain.schemas import AuthSessionState
from src.domain.services import (
    AuthorizationService,
    PermissionScopeService,
    SecurityService,
    StoreService,
    permission_scope_service,
)
from src.libs.gateways import GatewayService, gateway_service
from src.libs.notifications import NotificationManager, notification_manager
from src.libs.throttler import limiter


@lru_cache(maxsize=1)
def get_security_scheme() -> HTTPBearer:
    return HTTPBearer(auto_error=False)


def get_store_service(session: Annotated[AsyncSession, Depends(get_db_session)]) -> StoreService:
    return StoreService(session=session)


def get_security_service(session: Annotated[AsyncSession, Depends(get_db_session)]) -> SecurityService:
    return SecurityService(session=session)


def get_permission_scope_service() -> PermissionScopeService:
    return permission_scope_service


def get_authorization_service(
    security_service: Annotated[SecurityService, Depends(get_security_service)],
    scope_service: Annotated[PermissionScopeService, Depends(get_permission_scope_service)],
) -> AuthorizationService:
    return AuthorizationService(security_service=security_service, permission_scope_service=scope_service)


def get_gateway_service() -> GatewayService:
    """
    Dependency to get the shipping, payment and tax gateway catalogs.
    """
    return gateway_service


def get_notification_manager() -> NotificationManager:
    """
    Dependency to get the notification manager.
    """
    return notification_manager


def create_rate_limit_dependency(
    namespace: str,
    custom_limit: str | None = None,
    key_func: Callable[[Request], str] | None = None,
) -> Callable[..., Coroutine[Any, Any, None]]:
    """
    Create a rate limit dependency for specific routes or routers.

    Args:
        namespace (str): The namespace for rate limiting (e.g., "stores")
        custom_limit (str | None): Optional custom limit string (e.g., "10/minute", "100/hour")
        key_func (Callable[[Request], str] | None): Optional function to extract client key from request

    Returns:
        Dependency function that can be used with FastAPI routes
    """

    def _default_key_func(request: Request) -> str:
        return get_client_ip(request) or "unknown"

    async def rate_limit_dependency(request: Request) -> None:
        client_key = (key_func or _default_key_func)(request)

        status = await limiter.hit(namespace=namespace, client_key=client_key, custom_limit=custom_limit)

        if not status.allowed:
            raise errors.RateLimitExceededError(headers=CIMultiDict(status.headers()))

    return rate_limit_dependency


api_rate_limit = Depends(create_rate_limit_dependency("storefront_api", settings.STORE_API_RATE_LIMIT))
notification_rate_limit = Depends(
    create_rate_limit_dependency("storefront_notifications", settings.NOTIFICATION_RATE_LIMIT)
)


async def requires_authenticated_account(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(get_security_scheme())],
    security_service: Annotated[SecurityService, Depends(get_security_service)],
) -> AuthSessionState:
    """
    Dependency to ensure the request carries a valid bearer token.

    Args:
        credentials: The HTTP Authorization credentials
        security_service: Service decoding the token

    Returns:
        AuthSessionState: The caller the token was issued for

    Raises:
        InvalidTokenError: If the token is missing, invalid or expired
    """
    if not credentials or not credentials.credentials:
        raise errors.InvalidTokenError()

    decoded_token = security_service.decode_jwt_token(credentials.credentials)
    return security_service.get_session_state(decoded_token)


def require_permissions(*permission_ids: str):
    """
    Create a dependency requiring the caller to hold any of `permission_ids` globally.

    Args:
        *permission_ids (str): Permission ids, e.g `store:create`

    Returns:
        Dependency function that can be used with FastAPI routes
    """

    async def dependency(
        auth_state: Annotated[AuthSessionState, Depends(requires_authenticated_account)],
        authorization_service: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> AuthSessionState:
        if not await authorization_service.has_global_permission(auth_state.user_name, *permission_ids):
            raise errors.InsufficientPermissionError(metadata={"permissions": list(permission_ids)})

        return auth_state

    return dependency
