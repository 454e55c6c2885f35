from typing import TypeVar

from jinja2 import Environment, TemplatesNotFound
from src.core.config import settings
from src.core.logging import get_logger
from src.core.mjml import MJML_ENVIRONMENT
from src.libs.notifications.enums import NotificationStatus
from src.libs.notifications.exceptions import NotificationError, NotificationTemplateNotFoundError
from src.libs.notifications.factory import NotificationFactory
from src.libs.notifications.schemas import EmailNotification

logger = get_logger(__name__)

NotificationType = TypeVar("NotificationType", bound=EmailNotification)

TEMPLATE_EXTENSION = "mjml.html"


class NotificationManager:
    """
    Builds notifications from their templates and schedules their delivery.
    """

    def __init__(self, environment: Environment, default_language: str) -> None:
        self.environment = environment
        self.default_language = default_language

    def template_candidates(self, template_base: str, language: str | None) -> list[str]:
        """
        Template names to try, most specific first.

        The requested language comes first, then the default language, then the
        language neutral template.
        """
        candidates = [
            f"{template_base}.{code}.{TEMPLATE_EXTENSION}" for code in (language, self.default_language) if code
        ]
        candidates.append(f"{template_base}.{TEMPLATE_EXTENSION}")
        return list(dict.fromkeys(candidates))

    def resolve_template(self, template_base: str, language: str | None) -> str:
        """
        Resolve the template to render for `language`.

        Raises:
            NotificationTemplateNotFoundError: If no candidate template exists
        """
        candidates = self.template_candidates(template_base, language)

        try:
            return self.environment.select_template(candidates).name or candidates[-1]
        except TemplatesNotFound as e:
            raise NotificationTemplateNotFoundError(
                detail=f"No template found for {template_base}",
                metadata={"candidates": candidates},
            ) from e

    def get_new_notification(
        self,
        notification_class: type[NotificationType],
        object_id: str,
        object_type: str,
        language: str | None,
    ) -> NotificationType:
        """
        Create a notification about an object, bound to the template of the requested language.

        Args:
            notification_class: The notification type to create
            object_id (str): Id of the object the notification is about
            object_type (str): Type of the object the notification is about
            language (str | None): Requested language, the default language when empty

        Returns:
            The new, inactive notification
        """
        language = language or self.default_language

        return notification_class(
            object_id=object_id,
            object_type=object_type,
            language=language,
            template_name=self.resolve_template(notification_class.template_base, language),
        )

    def schedule_send_notification(self, notification: EmailNotification) -> EmailNotification:
        """
        Queue a notification for delivery. Inactive notifications are skipped.

        Raises:
            NotificationError: If the notification has no recipient or sender
        """
        if not notification.is_active:
            logger.info(
                f"{__name__}.schedule_send_notification:: skipping inactive notification {notification.id}",
                extra={"notification_id": notification.id, "notification_type": notification.type},
            )
            notification.status = NotificationStatus.SKIPPED
            return notification

        if not notification.recipient or not notification.sender:
            raise NotificationError(detail="A notification needs a sender and a recipient to be sent.")

        NotificationFactory.get_provider(notification.delivery_method).schedule(notification)
        notification.status = NotificationStatus.SCHEDULED

        return notification


notification_manager = NotificationManager(
    environment=MJML_ENVIRONMENT,
    default_language=settings.NOTIFICATION_DEFAULT_LANGUAGE,
)
