from .auth import AuthenticationError, InvalidTokenError  # noqa: F401
from .authz import InsufficientPermissionError  # noqa: F401
from .base import (  # noqa: F401
    InternalServerError,
    NotFoundError,
    RateLimitExceededError,
    ServiceError,
    UnauthorizedError,
)
from .database import DatabaseError  # noqa: F401
from .store import StoreNotFoundError, StoreNotificationError  # noqa: F401

__all__ = [
    "AuthenticationError",
    "InvalidTokenError",
    "InsufficientPermissionError",
    "InternalServerError",
    "NotFoundError",
    "RateLimitExceededError",
    "ServiceError",
    "UnauthorizedError",
    "DatabaseError",
    "StoreNotFoundError",
    "StoreNotificationError",
]
