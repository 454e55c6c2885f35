import smtplib
from unittest.mock import AsyncMock, patch

import pytest
from src.domain.tasks import send_email_task
from src.libs.mailer import (
    MailerConnectionError,
    MailerInvalidRecipientError,
    MailerRequest,
    MailerResponse,
    SMTPConfiguration,
)
from src.libs.mailer.providers import SMTPProvider


def make_request(**kwargs) -> MailerRequest:
    values = {
        "sender": "shop@example.com",
        "recipients": ["shop@example.com"],
        "subject": "ContactUs submission",
        "html_content": "<p>Hello</p>",
    }
    values.update(kwargs)
    return MailerRequest(**values)


class TestSMTPProvider:
    """Test cases for SMTPProvider"""

    def setup_method(self):
        self.provider = SMTPProvider(SMTPConfiguration(host="smtp.example.com", port=587))

    def test_build_message(self):
        """Test the message carries headers and the html alternative."""
        message = self.provider.build_message(make_request(reply_to="customer@example.com"))

        assert message["Subject"] == "ContactUs submission"
        assert message["To"] == "shop@example.com"
        assert message["Reply-To"] == "customer@example.com"
        assert message["Message-ID"].endswith("@example.com>")
        assert "<p>Hello</p>" in message.get_body(preferencelist=("html",)).get_content()

    @pytest.mark.asyncio
    async def test_send_email(self):
        """Test delivery goes through STARTTLS without login by default."""
        with patch("src.libs.mailer.providers.smtp.smtplib.SMTP") as smtp_class:
            smtp = smtp_class.return_value
            smtp.send_message.return_value = {}

            response = await self.provider.send_email(make_request())

        assert response.status == "sent"
        assert response.refused_recipients == []
        smtp.starttls.assert_called_once()
        smtp.login.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_email_refused(self):
        """Test refused recipients surface as invalid recipient errors."""
        with patch("src.libs.mailer.providers.smtp.smtplib.SMTP") as smtp_class:
            smtp = smtp_class.return_value
            smtp.send_message.side_effect = smtplib.SMTPRecipientsRefused({"shop@example.com": (550, b"no")})

            with pytest.raises(MailerInvalidRecipientError):
                await self.provider.send_email(make_request())

    @pytest.mark.asyncio
    async def test_send_email_unreachable(self):
        """Test connection failures surface as retryable errors."""
        with patch("src.libs.mailer.providers.smtp.smtplib.SMTP", side_effect=ConnectionRefusedError()):
            with pytest.raises(MailerConnectionError):
                await self.provider.send_email(make_request())


class TestSendEmailTask:
    """Test cases for the send_email_task"""

    def test_send_email_task(self):
        """Test the task validates its payload and delivers it."""
        response = MailerResponse(provider="smtp", message_id="<1@example.com>", status="sent")

        with patch("src.domain.tasks.mailer.mailer_service") as mailer_service:
            mailer_service.send_email = AsyncMock(return_value=response)

            result = send_email_task.run(payload=make_request().model_dump(mode="json"))

        assert result["status"] == "sent"
        request = mailer_service.send_email.call_args.args[0]
        assert request.subject == "ContactUs submission"
