from .base import NotFoundError, ServiceError


class StoreNotFoundError(NotFoundError):
    """
    Raised when no store exists for the requested id.
    """

    type_ = "store_not_found_error"
    title = "Store Not Found"
    detail = "The requested store could not be found."


class StoreNotificationError(ServiceError):
    """
    Raised when a store notification cannot be built, e.g. the store has no
    email address to send it to.
    """

    type_ = "store_notification_error"
    title = "Store Notification Error"
    detail = "The store notification could not be sent."
