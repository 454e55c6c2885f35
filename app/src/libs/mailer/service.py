from src.libs.mailer.factory import MailerFactory
from src.libs.mailer.interface import EmailProvider
from src.libs.mailer.schemas import MailerRequest, MailerResponse


class MailerService:
    """
    Sends emails through the configured provider, resolved on first use.
    """

    def __init__(self, provider: EmailProvider | None = None) -> None:
        self._provider = provider

    @property
    def provider(self) -> EmailProvider:
        if self._provider is None:
            self._provider = MailerFactory.get_configured_provider()
        return self._provider

    async def send_email(self, payload: MailerRequest) -> MailerResponse:
        """
        Send an email using the configured email provider.

        Raises:
            MailerError: if sending the email fails
        """
        return await self.provider.send_email(payload=payload)


mailer_service = MailerService()
