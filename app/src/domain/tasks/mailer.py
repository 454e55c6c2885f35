import asyncio
from typing import Any

from src.core.celery import celery_app
from src.core.config import settings
from src.core.logging import get_logger
from src.libs.mailer import MailerConnectionError, MailerError, MailerRequest, mailer_service

logger = get_logger(__name__)


@celery_app.task(
    name="send_email_task",
    autoretry_for=(MailerConnectionError,),
    retry_kwargs={"max_retries": 3, "countdown": 5},
    queue=settings.CELERY_DEFAULT_TASKS_QUEUE,
)
def send_email_task(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Deliver an email built by the notification manager.
    """
    request = MailerRequest.model_validate(payload)

    try:
        response = asyncio.run(mailer_service.send_email(request))
    except MailerError:
        logger.exception(
            f"{__name__}.send_email_task:: failed to deliver email",
            extra={"subject": request.subject, "template_name": request.template_name},
        )
        raise

    return response.model_dump()
