from .base import UnauthorizedError


class InsufficientPermissionError(UnauthorizedError):
    """
    Raised when the caller lacks a permission, globally or for the scopes of the
    objects being accessed.
    """

    type_ = "insufficient_permission_error"
    title = "Insufficient Permission"
    detail = "You do not have the permission required for this operation."
