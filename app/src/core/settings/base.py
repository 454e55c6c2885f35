import secrets
import warnings
from pathlib import Path
from typing import Annotated, Any, Literal, Self

from dotenv import load_dotenv
from pydantic import AnyUrl, BeforeValidator, EmailStr, PostgresDsn, RedisDsn, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


def parse_cors(v: Any) -> list[str]:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list):
        return v
    elif isinstance(v, str):
        return [v]
    raise ValueError(v)


def parse_string_separated_list(value: Any) -> list[str]:
    """Parse a comma separated string (optionally wrapped in brackets) into a list."""
    if isinstance(value, list):
        return value

    if not isinstance(value, str):
        raise ValueError(f"`{value}` expected to be list or comma separated string")

    value = value.replace("[", "").replace("]", "")
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    BASE_DIR: str = str(Path(__file__).resolve().parent.parent.parent.parent)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def MJML_TEMPLATES_DIR(self) -> str:
        return str(Path(self.BASE_DIR) / "templates" / "mjml")

    APP_NAME: str = "Storefront"
    APP_DESCRIPTION: str = "Storefront API for store configuration management"
    APP_VERSION: str = "0.1.0"
    OPENAPI_USERNAME: str = "admin"
    OPENAPI_PASSWORD: str = "changethis"
    OPENAPI_DOCS_URL: str = "/docs"
    OPENAPI_JSON_SCHEMA_URL: str = "/openapi.json"
    AUTH_SECRET_KEY: str = secrets.token_hex(64)
    AUTH_TOKEN_MAX_AGE: int = 60 * 60 * 8  # 8 hours
    DOMAIN: str = "localhost"
    PORT: str = "8000"
    API_STR: str = "/api"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_NAMESPACE: str = "storefront_base_throttler"
    STORE_API_RATE_LIMIT: str = "120/minute"
    NOTIFICATION_RATE_LIMIT: str = "10/minute"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def server_url(self) -> str:
        if self.ENVIRONMENT == "local":
            return f"http://{self.DOMAIN}:{self.PORT}"
        return f"https://{self.DOMAIN}"

    BACKEND_CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = []

    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str

    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str | None = None
    REDIS_DB: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> PostgresDsn:
        return PostgresDsn.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    def _build_redis_url(self, db: int) -> RedisDsn:
        return RedisDsn.build(
            scheme="redis",
            host=self.REDIS_HOST,
            port=self.REDIS_PORT,
            password=self.REDIS_PASSWORD or None,
            path=f"{db}",
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def REDIS_URL(self) -> RedisDsn:
        return self._build_redis_url(self.REDIS_DB)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def THROTTLER_REDIS_URL(self) -> RedisDsn:
        return self._build_redis_url(2)

    CELERY_DEFAULT_TASKS_QUEUE: str = "storefront_default_tasks"

    SMTP_TLS: bool = True
    SMTP_SSL: bool = False
    SMTP_AUTH_SUPPORT: bool = False
    SMTP_PORT: int = 587
    SMTP_HOST: str = "localhost"
    SMTP_USER: str | None = None
    SMTP_PASSWORD: str | None = None

    MAILER_DEFAULT_SENDER: EmailStr = "noreply@localhost.com"
    NOTIFICATION_DEFAULT_LANGUAGE: str = "en-US"

    STORE_SHIPPING_METHODS: Annotated[list[str] | str, BeforeValidator(parse_string_separated_list)] = [
        "FixedRate",
    ]
    STORE_PAYMENT_METHODS: Annotated[list[str] | str, BeforeValidator(parse_string_separated_list)] = [
        "DefaultManualPaymentMethod",
    ]
    STORE_TAX_PROVIDERS: Annotated[list[str] | str, BeforeValidator(parse_string_separated_list)] = [
        "FixedRate",
    ]

    def _check_default_secret(self, var_name: str, value: str | None) -> None:
        if value == "changethis":
            message = (
                f'The value of {var_name} is "changethis", ' "for security, please change it, at least for deployments."
            )
            if self.ENVIRONMENT in ["local", "staging"]:
                warnings.warn(message, stacklevel=1)
            else:
                raise ValueError(message)

    @model_validator(mode="after")
    def _enforce_non_default_secrets(self) -> Self:
        self._check_default_secret("AUTH_SECRET_KEY", self.AUTH_SECRET_KEY)
        self._check_default_secret("POSTGRES_PASSWORD", self.POSTGRES_PASSWORD)
        self._check_default_secret("OPENAPI_PASSWORD", self.OPENAPI_PASSWORD)

        return self

    @model_validator(mode="after")
    def _enforce_mailer_config(self) -> Self:
        if self.SMTP_AUTH_SUPPORT and (not self.SMTP_USER or not self.SMTP_PASSWORD):
            raise ValueError("SMTP configuration is incomplete. Please check SMTP settings.")

        return self
