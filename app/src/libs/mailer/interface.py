from abc import ABC, abstractmethod

from src.libs.mailer.schemas import MailerRequest, MailerResponse


class EmailProvider(ABC):
    """
    Base abstract class for all email providers.
    """

    name: str

    @abstractmethod
    async def send_email(self, payload: MailerRequest) -> MailerResponse:
        """
        Deliver an email.

        Raises:
            MailerError: If the email cannot be delivered
        """
        pass
