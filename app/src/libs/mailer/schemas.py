from typing import Any

from pydantic import BaseModel, EmailStr, Field, PositiveInt


class SMTPConfiguration(BaseModel):
    """
    Connection settings of the SMTP provider.

    Attributes:
        host (str): SMTP server host.
        port (PositiveInt): SMTP server port.
        username (str | None): SMTP username, only used when `auth_required`.
        password (str | None): SMTP password, only used when `auth_required`.
        auth_required (bool): Whether to log in before sending.
        use_tls (bool): Whether to upgrade the connection with STARTTLS.
        use_ssl (bool): Whether to connect over implicit TLS.
        timeout (PositiveInt): Connection timeout in seconds.
    """

    host: str
    port: PositiveInt
    username: str | None = None
    password: str | None = None
    auth_required: bool = False
    use_tls: bool = True
    use_ssl: bool = False
    timeout: PositiveInt = 30


class MailerRequest(BaseModel):
    """
    An email to deliver.

    Either `html_content` is given, or `template_name` is rendered with
    `template_context` at delivery time.
    """

    template_name: str | None = None
    template_context: dict[str, Any] = Field(default_factory=dict)
    sender: EmailStr
    recipients: list[EmailStr] = Field(..., min_length=1)
    subject: str
    html_content: str | None = None
    text_content: str | None = None
    reply_to: EmailStr | None = None
    message_id: str | None = None


class MailerResponse(BaseModel):
    """
    Outcome of a delivery attempt.
    """

    provider: str
    message_id: str | None = None
    status: str
    refused_recipients: list[str] = Field(default_factory=list)
