from fastapi import status
from fastapi_problem.error import StatusProblem


class NotificationError(StatusProblem):
    """Base error for notification related issues"""

    type_ = "notification_error"
    title = "Notification Error"
    detail = "The notification could not be processed."
    status = status.HTTP_500_INTERNAL_SERVER_ERROR


class NotificationTemplateNotFoundError(NotificationError):
    """Raised when no template exists for a notification in any language."""

    type_ = "notification_template_not_found"
    title = "Notification Template Not Found"
    detail = "No template is available for the notification."
