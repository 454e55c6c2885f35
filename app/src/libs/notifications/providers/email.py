from src.core.celery import celery_app
from src.core.config import settings
from src.core.logging import get_logger
from src.libs.notifications.interface import NotificationProvider
from src.libs.notifications.schemas import EmailNotification

logger = get_logger(__name__)

SEND_EMAIL_TASK = "send_email_task"


class EmailProvider(NotificationProvider):
    """
    Queues email notifications on the `send_email_task` Celery task.
    """

    def schedule(self, notification: EmailNotification) -> None:
        payload = {
            "template_name": notification.template_name,
            "template_context": notification.get_template_context(),
            "sender": notification.sender,
            "recipients": [notification.recipient],
            "subject": notification.get_subject(),
        }

        celery_app.send_task(
            SEND_EMAIL_TASK,
            kwargs={"payload": payload},
            queue=settings.CELERY_DEFAULT_TASKS_QUEUE,
        )

        logger.info(
            f"src.libs.notifications.providers.email:: scheduled {notification.type} {notification.id}",
            extra={"notification_id": notification.id, "object_id": notification.object_id},
        )
