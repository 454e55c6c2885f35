from src.core.config import settings
from src.core.logging import get_logger
from src.libs.mailer.interface import EmailProvider
from src.libs.mailer.providers import SMTPProvider
from src.libs.mailer.schemas import SMTPConfiguration

logger = get_logger(__name__)


class MailerFactory:
    """
    Factory for creating email providers.
    """

    _providers: dict[str, type[EmailProvider]] = {
        "smtp": SMTPProvider,
    }

    @classmethod
    def register_provider(cls, name: str, provider_class: type[EmailProvider]) -> None:
        cls._providers[name] = provider_class

    @classmethod
    def create_provider(cls, provider_type: str, config: SMTPConfiguration) -> EmailProvider:
        """
        Create a provider instance.

        Raises:
            ValueError: If the provider type is not supported
        """
        if provider_type not in cls._providers:
            raise ValueError(f"Unsupported email provider type: {provider_type}")

        return cls._providers[provider_type](config)  # type: ignore[call-arg]

    @classmethod
    def get_configured_provider(cls) -> EmailProvider:
        """Get the SMTP provider configured from settings."""
        config = SMTPConfiguration(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            auth_required=settings.SMTP_AUTH_SUPPORT,
            use_ssl=settings.SMTP_SSL,
            use_tls=settings.SMTP_TLS,
        )

        logger.debug(f"src.libs.mailer.factory:: using smtp provider on {config.host}:{config.port}")
        return cls.create_provider("smtp", config)
