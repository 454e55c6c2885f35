from abc import ABC, abstractmethod

from src.libs.notifications.schemas import EmailNotification


class NotificationProvider(ABC):
    """
    Base abstract class for notification delivery providers.
    """

    @abstractmethod
    def schedule(self, notification: EmailNotification) -> None:
        """
        Hand a notification over for asynchronous delivery.

        Args:
            notification (EmailNotification): A fully built, active notification
        """
        pass
