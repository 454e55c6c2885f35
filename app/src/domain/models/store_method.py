from typing import TYPE_CHECKING

from sqlalchemy import TEXT, Boolean, Column, ForeignKey, String, UniqueConstraint
from sqlmodel import Field, Relationship
from src.core.database.mixins import StringIDMixin
from src.domain.enums import StoreMethodKind

if TYPE_CHECKING:
    from src.domain.models import Store


class StoreMethod(StringIDMixin, table=True):
    """
    A payment method, shipping method or tax provider attached to a store.

    Attributes:\n
        id (str): The unique identifier.
        store_id (str): The store the method belongs to.
        kind (StoreMethodKind): Whether this is a payment, shipping or tax method.
        code (str): The gateway code (e.g FixedRate).
        name (str | None): The display name.
        description (str | None): A free text description.
        logo_url (str | None): The url of the gateway logo.
        priority (int): Display order, lower first.
        is_active (bool): Whether the method is enabled for the store.
    """

    __table_args__ = (UniqueConstraint("store_id", "kind", "code", name="uq_store_method_store_kind_code"),)

    store_id: str = Field(
        sa_column=Column(String(128), ForeignKey("stores.id", ondelete="CASCADE"), nullable=False, index=True),
    )
    kind: StoreMethodKind = Field(sa_column=Column(TEXT(), nullable=False, index=True))
    code: str = Field(max_length=128, nullable=False)
    name: str | None = Field(default=None, max_length=256)
    description: str | None = Field(default=None, sa_column=Column(TEXT(), nullable=True))
    logo_url: str | None = Field(default=None, max_length=2048)
    priority: int = Field(default=0, nullable=False)
    is_active: bool = Field(default=False, sa_column=Column(Boolean(), nullable=False, default=False))

    # Relationships
    store: "Store" = Relationship(back_populates="methods")

    def __repr__(self):
        return f"<StoreMethod(kind={self.kind}, code={self.code}, is_active={self.is_active})>"
