import pytest
from pydantic import ValidationError
from src.core.settings.base import Settings, parse_cors, parse_string_separated_list

REQUIRED = {"POSTGRES_USER": "storefront", "POSTGRES_PASSWORD": "secret", "POSTGRES_DB": "storefront"}


class TestSettings:
    """Test cases for Settings"""

    def test_parse_string_separated_list(self):
        """Test comma separated values, bracketed or not, become lists."""
        assert parse_string_separated_list("FixedRate, BuyOnlinePickupInStore") == ["FixedRate", "BuyOnlinePickupInStore"]
        assert parse_string_separated_list("[Stripe,Manual,]") == ["Stripe", "Manual"]
        assert parse_string_separated_list(["Stripe"]) == ["Stripe"]

        with pytest.raises(ValueError):
            parse_string_separated_list(42)

    def test_parse_cors(self):
        """Test comma separated origins are split."""
        assert parse_cors("http://a.io, http://b.io") == ["http://a.io", "http://b.io"]

    def test_gateway_codes_from_environment(self, monkeypatch):
        """Test gateway catalogs are configurable through the environment."""
        monkeypatch.setenv("STORE_PAYMENT_METHODS", "Stripe,Adyen")

        settings = Settings(**REQUIRED)

        assert settings.STORE_PAYMENT_METHODS == ["Stripe", "Adyen"]

    def test_database_uri(self):
        """Test the database uri is built for psycopg."""
        settings = Settings(**REQUIRED, POSTGRES_HOST="db", POSTGRES_PORT=5433)

        assert str(settings.SQLALCHEMY_DATABASE_URI) == "postgresql+psycopg://storefront:secret@db:5433/storefront"

    def test_throttler_uses_its_own_redis_database(self):
        """Test rate limit counters live apart from the task broker."""
        settings = Settings(**REQUIRED, REDIS_HOST="cache")

        assert str(settings.REDIS_URL) == "redis://cache:6379/0"
        assert str(settings.THROTTLER_REDIS_URL) == "redis://cache:6379/2"

    def test_default_secret_rejected_in_production(self):
        """Test placeholder secrets are refused outside local and staging."""
        with pytest.raises(ValidationError):
            Settings(**{**REQUIRED, "POSTGRES_PASSWORD": "changethis"}, ENVIRONMENT="production")

    def test_incomplete_smtp_auth(self):
        """Test SMTP authentication needs credentials."""
        with pytest.raises(ValidationError):
            Settings(**REQUIRED, SMTP_AUTH_SUPPORT=True)
