from typing import TYPE_CHECKING, Any, ClassVar, Optional

from sqlalchemy import TEXT, Boolean, Column, ForeignKey, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, Relationship
from src.core.database.mixins import AuditableMixin, StringIDMixin
from src.domain.enums import StoreMethodKind, StoreState

if TYPE_CHECKING:
    from src.domain.models import FulfillmentCenter, StoreMethod


class Store(StringIDMixin, AuditableMixin, table=True):
    """
    Represents a storefront configuration.

    Attributes:\n
        id (str): The unique identifier for the store.
        name (str | None): The display name of the store.
        description (str | None): A free text description.
        url (str | None): The public url of the store.
        store_state (StoreState): Whether the store is open, closed or restricted.
        time_zone (str | None): The time zone the store operates in.
        country (str | None): The country of the store.
        region (str | None): The region of the store.
        default_language (str | None): The default language code (e.g en-US).
        default_currency (str | None): The default ISO 4217 currency code.
        catalog (str | None): The id of the catalog the store sells from.
        credit_card_save_policy (bool): Whether customers' cards may be saved.
        secure_url (str | None): The https url of the store.
        email (str | None): The store contact email.
        admin_email (str | None): The store administrator email.
        display_out_of_stock (bool): Whether out of stock products are listed.
        fulfillment_center_id (str | None): The main fulfillment center.
        returns_fulfillment_center_id (str | None): The fulfillment center for returns.
        languages (list[str]): The languages the store supports.
        currencies (list[str]): The ISO 4217 currency codes the store accepts.
        trusted_groups (list[str]): Groups whose stores share customer accounts.
        settings (list[dict[str, Any]]): Store specific settings.
        methods (list[StoreMethod]): Payment, shipping and tax methods of the store.
    """

    SELECTABLE_FIELDS: ClassVar[list[str]] = [
        "id",
        "name",
        "url",
        "store_state",
        "catalog",
        "created_date",
    ]

    name: str | None = Field(default=None, max_length=128, index=True)
    description: str | None = Field(default=None, sa_column=Column(TEXT(), nullable=True))
    url: str | None = Field(default=None, max_length=2048)
    store_state: StoreState = Field(
        default=StoreState.OPEN,
        sa_column=Column(TEXT(), nullable=False, default=StoreState.OPEN),
    )
    time_zone: str | None = Field(default=None, max_length=128)
    country: str | None = Field(default=None, max_length=128)
    region: str | None = Field(default=None, max_length=128)
    default_language: str | None = Field(default=None, max_length=32)
    default_currency: str | None = Field(default=None, max_length=3)
    catalog: str | None = Field(default=None, max_length=128, index=True)
    credit_card_save_policy: bool = Field(default=False, sa_column=Column(Boolean(), nullable=False, default=False))
    secure_url: str | None = Field(default=None, max_length=2048)
    email: str | None = Field(default=None, max_length=128)
    admin_email: str | None = Field(default=None, max_length=128)
    display_out_of_stock: bool = Field(default=False, sa_column=Column(Boolean(), nullable=False, default=False))
    fulfillment_center_id: str | None = Field(
        default=None,
        sa_column=Column(String(128), ForeignKey("fulfillment_centers.id", ondelete="SET NULL"), nullable=True),
    )
    returns_fulfillment_center_id: str | None = Field(
        default=None,
        sa_column=Column(String(128), ForeignKey("fulfillment_centers.id", ondelete="SET NULL"), nullable=True),
    )
    languages: list[str] = Field(default_factory=list, sa_column=Column(JSONB, nullable=False, default=list))
    currencies: list[str] = Field(default_factory=list, sa_column=Column(JSONB, nullable=False, default=list))
    trusted_groups: list[str] = Field(default_factory=list, sa_column=Column(JSONB, nullable=False, default=list))
    settings: list[dict[str, Any]] = Field(default_factory=list, sa_column=Column(JSONB, nullable=False, default=list))

    # Relationships
    methods: list["StoreMethod"] = Relationship(
        back_populates="store",
        sa_relationship_kwargs={"lazy": "selectin", "cascade": "all, delete-orphan"},
    )
    fulfillment_center: Optional["FulfillmentCenter"] = Relationship(
        sa_relationship_kwargs={"lazy": "selectin", "foreign_keys": "[Store.fulfillment_center_id]"},
    )
    returns_fulfillment_center: Optional["FulfillmentCenter"] = Relationship(
        sa_relationship_kwargs={"lazy": "selectin", "foreign_keys": "[Store.returns_fulfillment_center_id]"},
    )

    def _methods_of(self, kind: StoreMethodKind) -> list["StoreMethod"]:
        return [method for method in self.methods if method.kind == kind]

    @property
    def payment_methods(self) -> list["StoreMethod"]:
        return self._methods_of(StoreMethodKind.PAYMENT)

    @property
    def shipping_methods(self) -> list["StoreMethod"]:
        return self._methods_of(StoreMethodKind.SHIPPING)

    @property
    def tax_providers(self) -> list["StoreMethod"]:
        return self._methods_of(StoreMethodKind.TAX)

    def __repr__(self):
        return f"<Store(id={self.id}, name={self.name})>"
