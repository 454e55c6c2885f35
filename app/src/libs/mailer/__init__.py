from .exceptions import (  # noqa: F401
    MailerConnectionError,
    MailerError,
    MailerInvalidRecipientError,
    MailerTemplateError,
)
from .factory import MailerFactory  # noqa: F401
from .interface import EmailProvider  # noqa: F401
from .schemas import MailerRequest, MailerResponse, SMTPConfiguration  # noqa: F401
from .service import MailerService, mailer_service  # noqa: F401
