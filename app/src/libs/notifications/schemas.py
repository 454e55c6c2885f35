from typing import Any, ClassVar
from uuid import uuid4

from pydantic import BaseModel, EmailStr, Field
from src.libs.notifications.enums import NotificationDeliveryMethod, NotificationStatus


class EmailNotification(BaseModel):
    """
    Base class of every email notification.

    Subclasses set `template_base` (template path without the language and
    extension) and may extend `get_template_context`.

    Attributes:
        id (str): Unique identifier of the notification.
        type (str): The notification type, the subclass name.
        object_id (str): Id of the object the notification is about.
        object_type (str): Type of the object the notification is about.
        language (str): Language the notification is rendered in.
        template_name (str | None): The resolved template to render.
        subject (str | None): The email subject.
        sender (EmailStr | None): The sender address.
        recipient (EmailStr | None): The recipient address.
        is_active (bool): Inactive notifications are never delivered.
        status (NotificationStatus): Delivery status.
    """

    template_base: ClassVar[str]
    delivery_method: ClassVar[NotificationDeliveryMethod] = NotificationDeliveryMethod.EMAIL

    id: str = Field(default_factory=lambda: uuid4().hex)
    type: str = ""
    object_id: str
    object_type: str
    language: str
    template_name: str | None = None
    subject: str | None = None
    sender: EmailStr | None = None
    recipient: EmailStr | None = None
    is_active: bool = False
    status: NotificationStatus = NotificationStatus.PENDING

    def model_post_init(self, __context: Any) -> None:
        if not self.type:
            self.type = type(self).__name__

    def get_subject(self) -> str:
        return self.subject or self.type

    def get_template_context(self) -> dict[str, Any]:
        """Variables the template is rendered with."""
        return {
            "notification_id": self.id,
            "object_id": self.object_id,
            "object_type": self.object_type,
            "language": self.language,
        }
