import smtplib
from collections.abc import Iterator
from contextlib import contextmanager
from email.message import EmailMessage
from email.utils import make_msgid

from jinja2 import TemplateError
from src.core.logging import get_logger
from src.core.mjml import mjml_templates
from src.libs.mailer.exceptions import (
    MailerConnectionError,
    MailerError,
    MailerInvalidRecipientError,
    MailerTemplateError,
)
from src.libs.mailer.interface import EmailProvider
from src.libs.mailer.schemas import MailerRequest, MailerResponse, SMTPConfiguration

logger = get_logger(__name__)


class SMTPProvider(EmailProvider):
    """
    Email provider delivering through an SMTP server.
    """

    name = "smtp"

    def __init__(self, config: SMTPConfiguration) -> None:
        self.config = config

    @contextmanager
    def _connect(self) -> Iterator[smtplib.SMTP]:
        config = self.config

        if config.use_ssl:
            smtp: smtplib.SMTP = smtplib.SMTP_SSL(host=config.host, port=config.port, timeout=config.timeout)
        else:
            smtp = smtplib.SMTP(host=config.host, port=config.port, timeout=config.timeout)

        with smtp:
            if config.use_tls and not config.use_ssl:
                smtp.starttls()
            if config.auth_required and config.username and config.password:
                smtp.login(config.username, config.password)
            yield smtp

    def _render(self, payload: MailerRequest) -> str | None:
        if payload.html_content is not None or payload.template_name is None:
            return payload.html_content

        try:
            return mjml_templates.get_template(payload.template_name).render(**payload.template_context)
        except TemplateError as e:
            logger.exception(f"src.libs.mailer.providers.smtp:: failed to render template {payload.template_name}")
            raise MailerTemplateError() from e

    def build_message(self, payload: MailerRequest) -> EmailMessage:
        """
        Build the MIME message for `payload`, rendering its template when needed.
        """
        html_content = self._render(payload)

        message = EmailMessage()
        message["Subject"] = payload.subject
        message["From"] = str(payload.sender)
        message["To"] = ", ".join(str(recipient) for recipient in payload.recipients)
        message["Message-ID"] = payload.message_id or make_msgid(domain=str(payload.sender).split("@")[1])

        if payload.reply_to:
            message["Reply-To"] = str(payload.reply_to)

        message.set_content(payload.text_content or "")
        if html_content:
            message.add_alternative(html_content, subtype="html")

        return message

    async def send_email(self, payload: MailerRequest) -> MailerResponse:
        message = self.build_message(payload)

        try:
            with self._connect() as smtp:
                refused = smtp.send_message(message)
        except smtplib.SMTPRecipientsRefused as e:
            logger.exception(f"src.libs.mailer.providers.smtp:: recipients refused: {list(e.recipients)}")
            raise MailerInvalidRecipientError() from e
        except (smtplib.SMTPAuthenticationError, smtplib.SMTPConnectError, OSError) as e:
            logger.exception(f"src.libs.mailer.providers.smtp:: could not reach {self.config.host}:{self.config.port}")
            raise MailerConnectionError() from e
        except smtplib.SMTPException as e:
            logger.exception("src.libs.mailer.providers.smtp:: failed to send email")
            raise MailerError(detail="Failed to send email via SMTP") from e

        return MailerResponse(
            provider=self.name,
            message_id=message["Message-ID"],
            status="sent",
            refused_recipients=list(refused),
        )
