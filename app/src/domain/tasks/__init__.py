from .mailer import send_email_task

__all__ = [
    "send_email_task",
]
