from fastapi import status

from .base import UnauthorizedError


class AuthenticationError(UnauthorizedError):
    """
    Base error for missing, malformed or expired credentials.
    """

    type_ = "authentication_error"
    title = "Invalid credentials"
    detail = "Please provide valid authentication credentials."
    status = status.HTTP_401_UNAUTHORIZED


class InvalidTokenError(AuthenticationError):
    """
    Raised when the bearer token cannot be decoded or has expired.
    """

    type_ = "invalid_token_error"
    title = "Invalid or expired authentication token"
    detail = "Please login to continue."
