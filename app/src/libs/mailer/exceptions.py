from fastapi import status
from fastapi_problem.error import StatusProblem


class MailerError(StatusProblem):
    """Base error for mail delivery failures, retried by the email task."""

    type_ = "mailer_error"
    title = "Mailer Error"
    detail = "The email could not be delivered."
    status = status.HTTP_500_INTERNAL_SERVER_ERROR


class MailerTemplateError(MailerError):
    """Raised when an email template cannot be rendered."""

    type_ = "mailer_template_error"
    title = "Mailer Template Error"
    detail = "The email template could not be rendered."


class MailerConnectionError(MailerError):
    """Raised when the mail server cannot be reached or rejects the credentials."""

    type_ = "mailer_connection_error"
    title = "Mailer Connection Error"
    detail = "Could not connect to the mail server."
    status = status.HTTP_503_SERVICE_UNAVAILABLE


class MailerInvalidRecipientError(MailerError):
    """Raised when the mail server refuses every recipient."""

    type_ = "mailer_invalid_recipient_error"
    title = "Invalid Recipient Error"
    detail = "The recipient email addresses were refused."
    status = status.HTTP_400_BAD_REQUEST
