from sqlmodel import Field
from src.core.database.mixins import AuditableMixin, StringIDMixin


class FulfillmentCenter(StringIDMixin, AuditableMixin, table=True):
    """
    Represents a warehouse that ships or receives store orders.
    """

    name: str | None = Field(default=None, max_length=128)
    description: str | None = Field(default=None, max_length=1024)
    line1: str | None = Field(default=None, max_length=1024)
    line2: str | None = Field(default=None, max_length=1024)
    city: str | None = Field(default=None, max_length=128)
    state_province: str | None = Field(default=None, max_length=128)
    country_code: str | None = Field(default=None, max_length=64)
    country_name: str | None = Field(default=None, max_length=128)
    postal_code: str | None = Field(default=None, max_length=32)
    phone: str | None = Field(default=None, max_length=64)
    email: str | None = Field(default=None, max_length=128)
